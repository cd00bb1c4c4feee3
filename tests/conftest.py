import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Ensure the project's src directory is on sys.path for tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402

from email_api.domain.action_link import ActionLinkRecognizer  # noqa: E402
from email_api.infrastructure.email.mock import MockEmailSender  # noqa: E402
from email_api.infrastructure.store.memory import InMemoryTokenStore  # noqa: E402
from email_api.services.notification_service import NotificationService  # noqa: E402
from email_api.services.verification_service import VerificationService  # noqa: E402

from tests.fixtures.app_factory import FRONTEND_URL  # noqa: E402


class FrozenClock:
    """Deterministic clock; call it to read the time, advance() to move it."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def store():
    return InMemoryTokenStore()


@pytest.fixture
def verification_service(store, clock):
    return VerificationService(
        store,
        frontend_url=FRONTEND_URL,
        recognizer=ActionLinkRecognizer(trusted_hosts=["firebaseapp.com"]),
        clock=clock,
    )


@pytest.fixture
def sender():
    return MockEmailSender()


@pytest.fixture
def notification_service(verification_service, sender):
    return NotificationService(
        verification_service,
        sender,
        from_email="noreply@drivecore.test",
        frontend_url=FRONTEND_URL,
    )


@pytest.fixture
def test_app():
    """Yield (app, store, sender) for a freshly routed app."""
    from tests.fixtures.app_factory import create_test_app

    yield create_test_app()
