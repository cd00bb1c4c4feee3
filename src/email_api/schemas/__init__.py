"""Schema exports for API request/response models."""

from .notifications import (
    DeviceAddedRequest,
    InvoiceRequest,
    TrackerDetailsPayload,
    TransferNotificationRequest,
)
from .verification import (
    ActionResponse,
    HealthResponse,
    SendVerificationRequest,
    SendVerificationResponse,
    SendWelcomePurchaseRequest,
    SendWelcomePurchaseResponse,
    TokenStatusResponse,
    VerifyTokenRequest,
    VerifyTokenResponse,
)

__all__ = [
    # Verification schemas
    "SendVerificationRequest",
    "SendVerificationResponse",
    "SendWelcomePurchaseRequest",
    "SendWelcomePurchaseResponse",
    "VerifyTokenRequest",
    "VerifyTokenResponse",
    "TokenStatusResponse",
    "ActionResponse",
    "HealthResponse",
    # Notification schemas
    "TrackerDetailsPayload",
    "TransferNotificationRequest",
    "DeviceAddedRequest",
    "InvoiceRequest",
]
