from .action_link import ActionLinkRecognizer
from .verification import (
    ConsumedVerification,
    TokenStatus,
    VerificationLink,
    VerificationRecord,
)

__all__ = [
    "ActionLinkRecognizer",
    "ConsumedVerification",
    "TokenStatus",
    "VerificationLink",
    "VerificationRecord",
]
