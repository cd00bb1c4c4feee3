from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ..deps import get_verification_service
from ..metrics import TOKENS_STORED
from ..schemas.verification import HealthResponse
from ..services.verification_service import VerificationService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(verification: VerificationService = Depends(get_verification_service)):
    count = await verification.token_count()
    if TOKENS_STORED is not None:
        TOKENS_STORED.set(count)
    return HealthResponse(timestamp=datetime.now(timezone.utc), tokens_in_memory=count)
