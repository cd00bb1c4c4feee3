"""Service layer for the verification token lifecycle."""

import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional
from urllib.parse import urlsplit, urlunsplit

from ..domain.action_link import ActionLinkRecognizer
from ..domain.verification import (
    ConsumedVerification,
    TokenStatus,
    VerificationLink,
    VerificationRecord,
    utcnow,
)
from ..exceptions import AlreadyVerifiedError, ExpiredError, NotFoundError, ValidationError
from ..logging_config import get_logger, token_hint
from ..metrics import record_token_operation
from ..ports.token_store import TokenStore

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60


class VerificationService:
    """Mints, consumes, inspects and revokes verification tokens.

    All record state goes through the injected ``TokenStore``; the service
    never holds records between calls.
    """

    def __init__(
        self,
        store: TokenStore,
        frontend_url: str,
        recognizer: Optional[ActionLinkRecognizer] = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.frontend_url = frontend_url.rstrip("/")
        self.recognizer = recognizer or ActionLinkRecognizer()
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock

    def generate_token(self) -> str:
        return secrets.token_urlsafe(32)

    def build_verification_url(self, token: str, callback_url: Optional[str] = None) -> str:
        if callback_url:
            # the token goes into the query even when the callback carries a fragment
            parts = urlsplit(callback_url)
            query = f"{parts.query}&token={token}" if parts.query else f"token={token}"
            return urlunsplit(parts._replace(query=query))
        return f"{self.frontend_url}/verify?token={token}"

    async def create(
        self,
        email: Optional[str],
        user_id: Optional[str] = None,
        callback_url: Optional[str] = None,
    ) -> VerificationLink:
        """Return the link to email for ``email``.

        A callback URL that is already a provider action link is relayed
        unchanged and nothing is stored. Otherwise a fresh token is minted,
        stored with a TTL and embedded into the callback (or default) URL.
        """
        if not email or not email.strip():
            raise ValidationError("Email is required")

        if callback_url and self.recognizer(callback_url):
            record_token_operation("passthrough")
            logger.info("verification_action_link_passthrough", email=email)
            return VerificationLink(verification_url=callback_url, token=None)

        token = self.generate_token()
        record = VerificationRecord(
            token=token,
            email=email,
            user_id=user_id or None,
            expires_at=self.clock() + self.ttl,
        )
        await self.store.put(token, record)
        record_token_operation("generate")
        logger.info(
            "verification_token_created",
            email=email,
            token=token_hint(token),
            expires_at=record.expires_at.isoformat(),
        )
        return VerificationLink(
            verification_url=self.build_verification_url(token, callback_url), token=token
        )

    async def create_welcome(
        self,
        email: Optional[str],
        first_name: Optional[str],
        user_id: Optional[str] = None,
        callback_url: Optional[str] = None,
    ) -> VerificationLink:
        """Same as ``create`` for the post-purchase welcome flow, which needs a name."""
        if not email or not email.strip() or not first_name or not first_name.strip():
            raise ValidationError("Email and firstName are required")
        return await self.create(email, user_id=user_id, callback_url=callback_url)

    async def consume(self, token: Optional[str]) -> ConsumedVerification:
        if not token:
            raise ValidationError("Token is required")

        record = await self.store.get(token)
        if record is None:
            raise NotFoundError("Invalid or not found token")

        if record.is_expired(self.clock()):
            # lazy eviction: expiry is only detected when a token is presented
            await self.store.delete(token)
            record_token_operation("expire")
            logger.info("verification_token_expired", token=token_hint(token))
            raise ExpiredError("Token has expired")

        if record.verified:
            raise AlreadyVerifiedError("Email has already been verified")

        if not await self.store.mark_verified(token):
            # lost the race to a concurrent consume, or revoked in between
            if await self.store.get(token) is None:
                raise NotFoundError("Invalid or not found token")
            raise AlreadyVerifiedError("Email has already been verified")
        record_token_operation("verify")
        logger.info("verification_token_consumed", email=record.email, token=token_hint(token))
        return ConsumedVerification(email=record.email, user_id=record.user_id)

    async def inspect(self, token: str) -> TokenStatus:
        """Report token state without consuming it or evicting it when expired."""
        record = await self.store.get(token)
        if record is None:
            raise NotFoundError("Token not found")
        record_token_operation("check")
        return TokenStatus(
            email=record.email,
            verified=record.verified,
            expired=record.is_expired(self.clock()),
            expires_at=record.expires_at,
        )

    async def revoke(self, token: str) -> bool:
        removed = await self.store.delete(token)
        if removed:
            record_token_operation("revoke")
            logger.info("verification_token_revoked", token=token_hint(token))
        return removed

    async def token_count(self) -> int:
        return await self.store.size()

    async def purge_expired(self) -> int:
        """Evict expired records when the store supports bulk eviction."""
        purge = getattr(self.store, "purge_expired", None)
        if purge is None:
            return 0
        removed = await purge(self.clock())
        if removed:
            record_token_operation("purge")
            logger.info("verification_tokens_purged", removed=removed)
        return int(removed)
