"""Providers for application-wide services and clients.

Long-lived clients (token store, email sender) live on ``app.state`` and are
installed by ``wiring.create_app`` and replaced at startup by
``composition.wire_app``. Services are cheap and built per request.
"""

from fastapi import Depends, Request

from ..config import Settings
from ..domain.action_link import ActionLinkRecognizer
from ..infrastructure.email.mock import MockEmailSender
from ..infrastructure.store.memory import InMemoryTokenStore
from ..ports.email import EmailSender
from ..ports.token_store import TokenStore
from ..services.notification_service import NotificationService
from ..services.verification_service import VerificationService

# Lazy singleton to avoid import-time side-effects
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create singleton Settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def get_settings_from_request(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is not None:
        return settings
    return get_settings()


def get_token_store(request: Request) -> TokenStore:
    """Get the token store from request.app.state, installing an in-memory one if absent."""
    store = getattr(request.app.state, "token_store", None)
    if store is None:
        store = InMemoryTokenStore()
        request.app.state.token_store = store
    return store


def get_email_sender(request: Request) -> EmailSender:
    sender = getattr(request.app.state, "email_sender", None)
    if sender is None:
        sender = MockEmailSender()
        request.app.state.email_sender = sender
    return sender


def build_verification_service(store: TokenStore, settings: Settings) -> VerificationService:
    return VerificationService(
        store,
        frontend_url=settings.frontend_url,
        recognizer=ActionLinkRecognizer(trusted_hosts=settings.trusted_action_link_hosts),
        ttl_seconds=settings.verification_token_ttl_seconds,
    )


def get_verification_service(
    store: TokenStore = Depends(get_token_store),
    settings: Settings = Depends(get_settings_from_request),
) -> VerificationService:
    return build_verification_service(store, settings)


def get_notification_service(
    verification: VerificationService = Depends(get_verification_service),
    sender: EmailSender = Depends(get_email_sender),
    settings: Settings = Depends(get_settings_from_request),
) -> NotificationService:
    return NotificationService(
        verification,
        sender,
        from_email=settings.email_from,
        frontend_url=settings.frontend_url,
    )
