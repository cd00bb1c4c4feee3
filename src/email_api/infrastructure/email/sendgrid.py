import asyncio
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from ...exceptions import DeliveryError
from ...logging_config import get_logger
from ...ports.email import EmailMessage

logger = get_logger(__name__)


class SendGridEmailSender:
    def __init__(self, api_key: str, client: Optional[SendGridAPIClient] = None):
        if not api_key and client is None:
            raise ValueError("a SendGrid API key is required")
        self.client = client or SendGridAPIClient(api_key)

    @staticmethod
    def _build_mail(message: EmailMessage) -> Mail:
        return Mail(
            from_email=message.from_email,
            to_emails=message.to_email,
            subject=message.subject,
            plain_text_content=message.text,
            html_content=message.html,
        )

    async def send(self, message: EmailMessage) -> None:
        mail = self._build_mail(message)
        # SendGrid client is synchronous; run it in a thread to avoid blocking the event loop
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(None, self.client.send, mail)
        except Exception as e:
            # python_http_client errors carry the provider's response body
            body = getattr(e, "body", None)
            if isinstance(body, bytes):
                body = body.decode(errors="replace")
            detail = str(body) if body else str(e)
            logger.error("sendgrid_send_failed", subject=message.subject, error=detail)
            raise DeliveryError("email provider rejected the message", details=detail) from e

        status = getattr(response, "status_code", None)
        if status is not None and int(status) >= 400:
            raise DeliveryError(
                "email provider rejected the message", details=f"HTTP {status}"
            )
        logger.info("sendgrid_send_accepted", subject=message.subject, status_code=status)
