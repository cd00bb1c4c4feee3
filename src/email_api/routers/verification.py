from typing import Optional

from fastapi import APIRouter, Depends

from ..config import Settings
from ..deps import get_notification_service, get_settings_from_request, get_verification_service
from ..exceptions import NotFoundError
from ..schemas.verification import (
    ActionResponse,
    SendVerificationRequest,
    SendVerificationResponse,
    SendWelcomePurchaseRequest,
    SendWelcomePurchaseResponse,
    TokenStatusResponse,
    VerifyTokenRequest,
    VerifyTokenResponse,
)
from ..services.notification_service import NotificationService
from ..services.verification_service import VerificationService

router = APIRouter(prefix="/api", tags=["verification"])


def _as_str(value) -> Optional[str]:
    return str(value) if value is not None else None


@router.post(
    "/send-verification",
    response_model=SendVerificationResponse,
    response_model_exclude_none=True,
)
async def send_verification(
    req: SendVerificationRequest,
    notifications: NotificationService = Depends(get_notification_service),
    settings: Settings = Depends(get_settings_from_request),
):
    link = await notifications.send_verification(
        req.email, user_id=_as_str(req.user_id), callback_url=req.callback_url
    )
    return SendVerificationResponse(
        message="Verification email sent successfully",
        verification_url=link.verification_url,
        token=link.token if settings.expose_token_in_response else None,
    )


@router.post(
    "/send-welcome-purchase",
    response_model=SendWelcomePurchaseResponse,
    response_model_exclude_none=True,
)
async def send_welcome_purchase(
    req: SendWelcomePurchaseRequest,
    notifications: NotificationService = Depends(get_notification_service),
    settings: Settings = Depends(get_settings_from_request),
):
    link = await notifications.send_welcome_purchase(
        req.email,
        req.first_name,
        user_id=_as_str(req.user_id),
        plan_name=req.plan_name,
        plan_price=_as_str(req.plan_price),
        vehicle_name=req.vehicle_name,
        callback_url=req.callback_url,
    )
    return SendWelcomePurchaseResponse(
        message="Welcome email sent successfully",
        token=link.token if settings.expose_token_in_response else None,
    )


async def _verify(token: Optional[str], verification: VerificationService) -> VerifyTokenResponse:
    consumed = await verification.consume(token)
    return VerifyTokenResponse(email=consumed.email, user_id=consumed.user_id)


@router.get("/verify/{token}", response_model=VerifyTokenResponse)
async def verify_token(
    token: str,
    verification: VerificationService = Depends(get_verification_service),
):
    return await _verify(token, verification)


@router.post("/verify", response_model=VerifyTokenResponse)
async def verify_token_from_body(
    req: VerifyTokenRequest,
    verification: VerificationService = Depends(get_verification_service),
):
    return await _verify(req.token, verification)


@router.get("/check/{token}", response_model=TokenStatusResponse)
async def check_token(
    token: str,
    verification: VerificationService = Depends(get_verification_service),
):
    status = await verification.inspect(token)
    return TokenStatusResponse(
        email=status.email,
        verified=status.verified,
        expired=status.expired,
        expires_at=status.expires_at,
    )


@router.delete("/token/{token}", response_model=ActionResponse)
async def revoke_token(
    token: str,
    verification: VerificationService = Depends(get_verification_service),
):
    if not await verification.revoke(token):
        raise NotFoundError("Token not found")
    return ActionResponse(message="Token removed")
