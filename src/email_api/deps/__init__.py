"""Dependency injection for FastAPI."""

from .providers import (
    build_verification_service,
    get_email_sender,
    get_notification_service,
    get_settings,
    get_settings_from_request,
    get_token_store,
    get_verification_service,
)

__all__ = [
    "build_verification_service",
    "get_email_sender",
    "get_notification_service",
    "get_settings",
    "get_settings_from_request",
    "get_token_store",
    "get_verification_service",
]
