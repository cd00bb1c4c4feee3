"""Verification token domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class VerificationRecord:
    """State of a single verification request, keyed by its token."""

    token: str
    email: str
    expires_at: datetime
    user_id: Optional[str] = None
    verified: bool = False

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def mark_verified(self) -> None:
        # monotonic: there is no way back to unverified
        self.verified = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token": self.token,
            "email": self.email,
            "user_id": self.user_id,
            "expires_at": self.expires_at.isoformat(),
            "verified": self.verified,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VerificationRecord":
        expires_at = datetime.fromisoformat(str(data["expires_at"]))
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        user_id = data.get("user_id")
        return cls(
            token=str(data["token"]),
            email=str(data["email"]),
            expires_at=expires_at,
            user_id=str(user_id) if user_id is not None else None,
            verified=bool(data.get("verified", False)),
        )


@dataclass(slots=True)
class VerificationLink:
    """Link to embed in an outgoing email.

    ``token`` is None when the caller supplied a ready-made provider action link.
    """

    verification_url: str
    token: Optional[str] = None


@dataclass(slots=True)
class ConsumedVerification:
    email: str
    user_id: Optional[str] = None


@dataclass(slots=True)
class TokenStatus:
    email: str
    verified: bool
    expired: bool
    expires_at: datetime


__all__ = ["VerificationRecord", "VerificationLink", "ConsumedVerification", "TokenStatus"]
