from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI

from .config import Settings
from .deps.providers import build_verification_service
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class WireResult:
    app: Any
    token_store: Any
    email_sender: Any
    teardown: Any


async def _sweep_loop(app: FastAPI, settings: Settings) -> None:
    interval = settings.token_sweep_interval_seconds
    while True:
        await asyncio.sleep(interval)
        try:
            service = build_verification_service(app.state.token_store, settings)
            await service.purge_expired()
        except Exception as e:
            logger.exception("token_sweep_failed", error=str(e))


async def wire_app(app: FastAPI) -> WireResult:
    """Install runtime clients on ``app.state``.

    Picks the Redis token store when ``redis_url`` is set and the SendGrid
    sender when an API key is configured; otherwise the in-memory defaults
    installed by ``wiring.create_app`` stay in place. Starts the periodic
    expired-token sweep when an interval is configured.
    """
    settings: Settings = getattr(app.state, "settings", None) or Settings()

    if settings.redis_url:
        from .infrastructure.store.redis_store import RedisTokenStore

        app.state.token_store = RedisTokenStore.from_url(
            settings.redis_url, retention_seconds=settings.redis_expired_retention_seconds
        )
        logger.info("initialized redis token store")

    if settings.sendgrid_api_key:
        from .infrastructure.email.sendgrid import SendGridEmailSender

        app.state.email_sender = SendGridEmailSender(settings.sendgrid_api_key)
        logger.info("initialized sendgrid email sender", email_from=settings.email_from)
    else:
        logger.warning("sendgrid_api_key not set; emails are recorded, not delivered")

    sweep_task = None
    if settings.token_sweep_interval_seconds > 0:
        sweep_task = asyncio.create_task(_sweep_loop(app, settings))
        logger.info(
            "token_sweep_scheduled", interval_seconds=settings.token_sweep_interval_seconds
        )

    async def _teardown():
        if sweep_task is not None:
            sweep_task.cancel()
            try:
                await sweep_task
            except asyncio.CancelledError:
                pass
        close = getattr(app.state.token_store, "close", None)
        if close is not None:
            try:
                await close()
            except Exception as e:
                logger.debug("token_store_close_failed", error=str(e))

    return WireResult(
        app=app,
        token_store=app.state.token_store,
        email_sender=app.state.email_sender,
        teardown=_teardown,
    )
