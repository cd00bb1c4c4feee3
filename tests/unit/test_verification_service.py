from datetime import timedelta
from urllib.parse import parse_qs, urlsplit

import pytest

from email_api.exceptions import (
    AlreadyVerifiedError,
    ExpiredError,
    NotFoundError,
    ValidationError,
)
from tests.fixtures.app_factory import FRONTEND_URL


def _token_from(url: str) -> str:
    return parse_qs(urlsplit(url).query)["token"][0]


@pytest.mark.asyncio
async def test_create_without_callback_builds_default_url(verification_service, store):
    link = await verification_service.create("a@b.com")
    assert link.token
    assert link.verification_url == f"{FRONTEND_URL}/verify?token={link.token}"
    assert await store.size() == 1


@pytest.mark.asyncio
async def test_create_with_plain_callback_appends_token(verification_service):
    link = await verification_service.create("a@b.com", callback_url="https://app.test/confirm")
    assert link.verification_url == f"https://app.test/confirm?token={link.token}"


@pytest.mark.asyncio
async def test_create_with_callback_that_has_query(verification_service):
    link = await verification_service.create("a@b.com", callback_url="https://app.test/c?lang=en")
    assert link.verification_url == f"https://app.test/c?lang=en&token={link.token}"
    assert _token_from(link.verification_url) == link.token


@pytest.mark.asyncio
async def test_create_with_callback_that_has_fragment(verification_service):
    link = await verification_service.create("a@b.com", callback_url="https://app.test/c#/verify")
    assert link.verification_url == f"https://app.test/c?token={link.token}#/verify"

    link = await verification_service.create(
        "a@b.com", callback_url="https://app.test/c?lang=en#done"
    )
    assert link.verification_url == f"https://app.test/c?lang=en&token={link.token}#done"


@pytest.mark.asyncio
async def test_create_stores_unverified_record_with_ttl(verification_service, store, clock):
    link = await verification_service.create("a@b.com", user_id="user-7")
    record = await store.get(link.token)
    assert record.email == "a@b.com"
    assert record.user_id == "user-7"
    assert record.verified is False
    assert record.expires_at == clock.now + timedelta(hours=24)


@pytest.mark.asyncio
@pytest.mark.parametrize("email", [None, "", "   "])
async def test_create_requires_email(verification_service, store, email):
    with pytest.raises(ValidationError):
        await verification_service.create(email)
    assert await store.size() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "callback",
    [
        "https://idp/action?mode=verifyEmail&oobCode=abc",
        "https://auth.test/action?oobCode=123",
        "https://drivecore.firebaseapp.com/__/auth/action?apiKey=k",
    ],
)
async def test_action_link_passes_through_without_token(verification_service, store, callback):
    link = await verification_service.create("x@y.com", callback_url=callback)
    assert link.verification_url == callback
    assert link.token is None
    assert await store.size() == 0


@pytest.mark.asyncio
async def test_tokens_are_unique(verification_service):
    tokens = {(await verification_service.create("a@b.com")).token for _ in range(50)}
    assert len(tokens) == 50


@pytest.mark.asyncio
async def test_create_welcome_requires_first_name(verification_service, store):
    with pytest.raises(ValidationError):
        await verification_service.create_welcome("a@b.com", None)
    with pytest.raises(ValidationError):
        await verification_service.create_welcome("", "Sam")
    assert await store.size() == 0
    link = await verification_service.create_welcome("a@b.com", "Sam")
    assert link.token is not None


@pytest.mark.asyncio
async def test_consume_once_then_already_verified(verification_service):
    link = await verification_service.create("a@b.com", user_id="u1")
    consumed = await verification_service.consume(link.token)
    assert consumed.email == "a@b.com"
    assert consumed.user_id == "u1"
    with pytest.raises(AlreadyVerifiedError):
        await verification_service.consume(link.token)


@pytest.mark.asyncio
async def test_consume_unknown_token(verification_service):
    with pytest.raises(NotFoundError):
        await verification_service.consume("nope")


@pytest.mark.asyncio
async def test_consume_missing_token(verification_service):
    with pytest.raises(ValidationError):
        await verification_service.consume(None)


@pytest.mark.asyncio
async def test_consume_expired_token_evicts(verification_service, store, clock):
    link = await verification_service.create("a@b.com")
    clock.advance(hours=24, seconds=1)
    with pytest.raises(ExpiredError):
        await verification_service.consume(link.token)
    assert await store.get(link.token) is None
    with pytest.raises(NotFoundError):
        await verification_service.inspect(link.token)
    with pytest.raises(NotFoundError):
        await verification_service.consume(link.token)


@pytest.mark.asyncio
async def test_token_valid_exactly_at_expiry(verification_service, clock):
    link = await verification_service.create("a@b.com")
    clock.advance(hours=24)
    consumed = await verification_service.consume(link.token)
    assert consumed.email == "a@b.com"


@pytest.mark.asyncio
async def test_expired_and_verified_reports_expired_first(verification_service, clock):
    link = await verification_service.create("a@b.com")
    await verification_service.consume(link.token)
    clock.advance(days=2)
    with pytest.raises(ExpiredError):
        await verification_service.consume(link.token)


@pytest.mark.asyncio
async def test_inspect_is_read_only(verification_service, store):
    link = await verification_service.create("a@b.com")
    for _ in range(3):
        status = await verification_service.inspect(link.token)
        assert status.email == "a@b.com"
        assert status.verified is False
        assert status.expired is False
    consumed = await verification_service.consume(link.token)
    assert consumed.email == "a@b.com"
    status = await verification_service.inspect(link.token)
    assert status.verified is True


@pytest.mark.asyncio
async def test_inspect_reports_expiry_without_evicting(verification_service, store, clock):
    link = await verification_service.create("a@b.com")
    clock.advance(days=1, minutes=1)
    status = await verification_service.inspect(link.token)
    assert status.expired is True
    assert await store.get(link.token) is not None


@pytest.mark.asyncio
async def test_revoke(verification_service):
    assert await verification_service.revoke("unknown") is False
    link = await verification_service.create("a@b.com")
    assert await verification_service.revoke(link.token) is True
    with pytest.raises(NotFoundError):
        await verification_service.inspect(link.token)
    with pytest.raises(NotFoundError):
        await verification_service.consume(link.token)


@pytest.mark.asyncio
async def test_revoke_ignores_verified_and_expired_state(verification_service, clock):
    link = await verification_service.create("a@b.com")
    await verification_service.consume(link.token)
    clock.advance(days=3)
    assert await verification_service.revoke(link.token) is True


@pytest.mark.asyncio
async def test_purge_expired(verification_service, clock):
    old = await verification_service.create("old@b.com")
    clock.advance(hours=23)
    fresh = await verification_service.create("new@b.com")
    clock.advance(hours=2)
    assert await verification_service.purge_expired() == 1
    assert await verification_service.token_count() == 1
    with pytest.raises(NotFoundError):
        await verification_service.inspect(old.token)
    assert (await verification_service.inspect(fresh.token)).email == "new@b.com"


@pytest.mark.asyncio
async def test_end_to_end_local_token(verification_service):
    link = await verification_service.create("a@b.com")
    assert link.verification_url.endswith(f"/verify?token={link.token}")
    status = await verification_service.inspect(link.token)
    assert (status.email, status.verified, status.expired) == ("a@b.com", False, False)
    consumed = await verification_service.consume(link.token)
    assert consumed.email == "a@b.com"
    with pytest.raises(AlreadyVerifiedError):
        await verification_service.consume(link.token)
