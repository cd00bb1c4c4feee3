from datetime import datetime
from typing import Optional, Union

from .base import CamelModel

# required fields are Optional here so that missing values surface as a
# uniform 400 from the service layer rather than a schema error


class SendVerificationRequest(CamelModel):
    email: Optional[str] = None
    user_id: Optional[Union[str, int]] = None
    callback_url: Optional[str] = None


class SendWelcomePurchaseRequest(CamelModel):
    email: Optional[str] = None
    user_id: Optional[Union[str, int]] = None
    first_name: Optional[str] = None
    plan_name: Optional[str] = None
    plan_price: Optional[Union[str, int, float]] = None
    vehicle_name: Optional[str] = None
    callback_url: Optional[str] = None


class VerifyTokenRequest(CamelModel):
    token: Optional[str] = None


class SendVerificationResponse(CamelModel):
    success: bool = True
    message: str
    verification_url: str
    token: Optional[str] = None


class SendWelcomePurchaseResponse(CamelModel):
    success: bool = True
    message: str
    token: Optional[str] = None


class VerifyTokenResponse(CamelModel):
    success: bool = True
    message: str = "Email verified successfully!"
    email: str
    user_id: Optional[str] = None


class TokenStatusResponse(CamelModel):
    success: bool = True
    email: str
    verified: bool
    expired: bool
    expires_at: datetime


class ActionResponse(CamelModel):
    success: bool = True
    message: str


class HealthResponse(CamelModel):
    status: str = "ok"
    timestamp: datetime
    tokens_in_memory: int
