from .notification_service import NotificationService, TrackerDetails
from .verification_service import VerificationService

__all__ = ["NotificationService", "TrackerDetails", "VerificationService"]
