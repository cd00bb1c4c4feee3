import pytest

from email_api import composition
from email_api.infrastructure.email.mock import MockEmailSender
from email_api.infrastructure.email.sendgrid import SendGridEmailSender
from email_api.infrastructure.store.memory import InMemoryTokenStore
from email_api.infrastructure.store.redis_store import RedisTokenStore
from email_api.wiring import create_app
from tests.fixtures.app_factory import make_settings


@pytest.mark.asyncio
async def test_defaults_stay_in_memory_without_configuration():
    app = create_app(make_settings())
    result = await composition.wire_app(app)
    try:
        assert isinstance(app.state.token_store, InMemoryTokenStore)
        assert isinstance(app.state.email_sender, MockEmailSender)
        assert result.token_store is app.state.token_store
    finally:
        await result.teardown()


@pytest.mark.asyncio
async def test_startup_initializes_redis_and_sendgrid():
    settings = make_settings(redis_url="redis://127.0.0.1:6379/0", sendgrid_api_key="SG.test-key")
    app = create_app(settings)
    result = await composition.wire_app(app)
    try:
        assert isinstance(app.state.token_store, RedisTokenStore)
        assert isinstance(app.state.email_sender, SendGridEmailSender)
    finally:
        await result.teardown()


@pytest.mark.asyncio
async def test_sweep_task_is_cancelled_on_teardown():
    app = create_app(make_settings(token_sweep_interval_seconds=3600))
    result = await composition.wire_app(app)
    await result.teardown()
    # teardown is idempotent with respect to the cancelled sweep
    await result.teardown()
