import asyncio

from ...logging_config import get_logger
from ...ports.email import EmailMessage

logger = get_logger(__name__)


class MockEmailSender:
    """Records messages instead of delivering them (no SendGrid key configured)."""

    def __init__(self):
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        # simulate async send
        await asyncio.sleep(0)
        self.sent.append(message)
        logger.info("mock_email_recorded", to=message.to_email, subject=message.subject)
