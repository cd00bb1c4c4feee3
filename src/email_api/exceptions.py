"""Error taxonomy translated to HTTP responses by the handlers in ``wiring``."""

from typing import Optional


class EmailApiError(Exception):
    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(EmailApiError):
    """A required request field is missing or blank."""

    status_code = 400


class NotFoundError(EmailApiError):
    status_code = 404


class ExpiredError(EmailApiError):
    """The token outlived its TTL; the record has been evicted."""

    status_code = 410


class AlreadyVerifiedError(EmailApiError):
    status_code = 400


class DeliveryError(EmailApiError):
    """The email provider rejected or failed to accept a message."""

    status_code = 500


__all__ = [
    "EmailApiError",
    "ValidationError",
    "NotFoundError",
    "ExpiredError",
    "AlreadyVerifiedError",
    "DeliveryError",
]
