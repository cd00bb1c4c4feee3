from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends

from ..deps import get_notification_service
from ..exceptions import ValidationError
from ..schemas.notifications import (
    DeviceAddedRequest,
    InvoiceRequest,
    TransferNotificationRequest,
)
from ..schemas.verification import ActionResponse
from ..services.notification_service import NotificationService, TrackerDetails

router = APIRouter(prefix="/api", tags=["notifications"])


def parse_end_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO 8601 date or datetime (a trailing ``Z`` is accepted)."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(
            "subscriptionEndDate must be an ISO 8601 date", details=value
        ) from None


@router.post("/send-transfer-notification", response_model=ActionResponse)
async def send_transfer_notification(
    req: TransferNotificationRequest,
    notifications: NotificationService = Depends(get_notification_service),
):
    tracker = None
    if req.tracker_details is not None:
        tracker = TrackerDetails(
            imei=req.tracker_details.imei or "",
            vehicle_name=req.tracker_details.vehicle_name,
            registration_number=req.tracker_details.registration_number,
        )
    await notifications.send_transfer_notification(
        req.email,
        str(req.transfer_id) if req.transfer_id is not None else None,
        tracker,
        from_user_name=req.from_user_name,
        subscription_end_date=parse_end_date(req.subscription_end_date),
    )
    return ActionResponse(message="Transfer notification email sent successfully")


@router.post("/send-device-added", response_model=ActionResponse)
async def send_device_added(
    req: DeviceAddedRequest,
    notifications: NotificationService = Depends(get_notification_service),
):
    await notifications.send_device_added(
        req.email,
        req.first_name,
        req.vehicle_name,
        req.plan_name,
        plan_price=str(req.plan_price) if req.plan_price is not None else None,
    )
    return ActionResponse(message="Device added email sent successfully")


@router.post("/send-invoice", response_model=ActionResponse)
async def send_invoice(
    req: InvoiceRequest,
    notifications: NotificationService = Depends(get_notification_service),
):
    await notifications.send_invoice(
        req.email,
        str(req.invoice_id) if req.invoice_id is not None else None,
        str(req.amount) if req.amount is not None else None,
        req.invoice_url,
        invoice_pdf=req.invoice_pdf,
    )
    return ActionResponse(message="Invoice email sent successfully")
