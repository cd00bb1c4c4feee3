"""Transactional email orchestration.

Each operation validates its inputs, lets ``VerificationService`` decide on the
link when one is needed, renders the message and hands it to the sender.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional
from urllib.parse import quote

from ..exceptions import DeliveryError, ValidationError
from ..logging_config import get_logger
from ..metrics import EMAILS_SENT
from ..ports.email import EmailMessage, EmailSender
from . import email_templates
from .email_templates import EmailContent
from .verification_service import VerificationService

logger = get_logger(__name__)


@dataclass(slots=True)
class TrackerDetails:
    imei: str
    vehicle_name: Optional[str] = None
    registration_number: Optional[str] = None


def _missing(*values: object) -> bool:
    return any(v is None or (isinstance(v, str) and not v.strip()) for v in values)


class NotificationService:
    def __init__(
        self,
        verification: VerificationService,
        sender: EmailSender,
        from_email: str,
        frontend_url: str,
    ):
        self.verification = verification
        self.sender = sender
        self.from_email = from_email
        self.frontend_url = frontend_url.rstrip("/")

    async def _deliver(self, template: str, to_email: str, content: EmailContent) -> None:
        message = EmailMessage(
            to_email=to_email,
            from_email=self.from_email,
            subject=content.subject,
            text=content.text,
            html=content.html,
        )
        try:
            await self.sender.send(message)
        except DeliveryError:
            self._count(template, "failure")
            logger.error("email_send_failed", template=template, to=to_email)
            raise
        except Exception as e:
            self._count(template, "failure")
            logger.exception("email_send_failed", template=template, to=to_email, error=str(e))
            raise DeliveryError("email delivery failed", details=str(e)) from e
        self._count(template, "success")
        logger.info("email_sent", template=template, to=to_email)

    def _link_ttl_seconds(self) -> int:
        return int(self.verification.ttl.total_seconds())

    @staticmethod
    def _count(template: str, result: str) -> None:
        if EMAILS_SENT is not None:
            EMAILS_SENT.labels(template=template, result=result).inc()

    async def send_verification(
        self,
        email: Optional[str],
        user_id: Optional[str] = None,
        callback_url: Optional[str] = None,
    ):
        link = await self.verification.create(email, user_id=user_id, callback_url=callback_url)
        content = email_templates.verification_email(
            link.verification_url, ttl_seconds=self._link_ttl_seconds()
        )
        # a token minted above stays stored even if delivery fails
        await self._deliver("verification", str(email), content)
        return link

    async def send_welcome_purchase(
        self,
        email: Optional[str],
        first_name: Optional[str],
        user_id: Optional[str] = None,
        plan_name: Optional[str] = None,
        plan_price: Optional[str] = None,
        vehicle_name: Optional[str] = None,
        callback_url: Optional[str] = None,
    ):
        link = await self.verification.create_welcome(
            email, first_name, user_id=user_id, callback_url=callback_url
        )
        content = email_templates.welcome_purchase_email(
            str(first_name),
            link.verification_url,
            plan_name=plan_name,
            plan_price=plan_price,
            vehicle_name=vehicle_name,
            ttl_seconds=self._link_ttl_seconds(),
        )
        await self._deliver("welcome_purchase", str(email), content)
        return link

    async def send_transfer_notification(
        self,
        email: Optional[str],
        transfer_id: Optional[str],
        tracker: Optional[TrackerDetails],
        from_user_name: Optional[str] = None,
        subscription_end_date: Optional[date] = None,
    ) -> None:
        if _missing(email, transfer_id) or tracker is None:
            raise ValidationError("Email, transferId, and trackerDetails are required")
        if _missing(tracker.imei):
            raise ValidationError("trackerDetails.imei is required")

        accept_url = f"{self.frontend_url}/transfer/accept?id={quote(str(transfer_id), safe='')}"
        content = email_templates.transfer_notification_email(
            accept_url,
            imei=tracker.imei,
            vehicle_name=tracker.vehicle_name,
            registration_number=tracker.registration_number,
            from_user_name=from_user_name,
            subscription_end_date=subscription_end_date,
        )
        await self._deliver("transfer_notification", str(email), content)

    async def send_device_added(
        self,
        email: Optional[str],
        first_name: Optional[str],
        vehicle_name: Optional[str],
        plan_name: Optional[str],
        plan_price: Optional[str] = None,
    ) -> None:
        if _missing(email, first_name, vehicle_name, plan_name):
            raise ValidationError("Email, firstName, vehicleName, and planName are required")
        content = email_templates.device_added_email(
            str(first_name),
            str(vehicle_name),
            str(plan_name),
            plan_price=plan_price,
            dashboard_url=f"{self.frontend_url}/dashboard",
        )
        await self._deliver("device_added", str(email), content)

    async def send_invoice(
        self,
        email: Optional[str],
        invoice_id: Optional[str],
        amount: Optional[str],
        invoice_url: Optional[str],
        invoice_pdf: Optional[str] = None,
    ) -> None:
        if _missing(email, invoice_id, amount, invoice_url):
            raise ValidationError("Email, invoiceId, amount, and invoiceUrl are required")
        content = email_templates.invoice_email(
            str(invoice_id), str(amount), str(invoice_url), invoice_pdf=invoice_pdf
        )
        await self._deliver("invoice", str(email), content)
