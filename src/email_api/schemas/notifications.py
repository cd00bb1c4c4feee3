from typing import Optional, Union

from .base import CamelModel


class TrackerDetailsPayload(CamelModel):
    imei: Optional[str] = None
    vehicle_name: Optional[str] = None
    registration_number: Optional[str] = None


class TransferNotificationRequest(CamelModel):
    email: Optional[str] = None
    transfer_id: Optional[Union[str, int]] = None
    tracker_details: Optional[TrackerDetailsPayload] = None
    from_user_name: Optional[str] = None
    # ISO 8601 date or datetime
    subscription_end_date: Optional[str] = None


class DeviceAddedRequest(CamelModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    vehicle_name: Optional[str] = None
    plan_name: Optional[str] = None
    plan_price: Optional[Union[str, int, float]] = None


class InvoiceRequest(CamelModel):
    email: Optional[str] = None
    invoice_id: Optional[Union[str, int]] = None
    amount: Optional[Union[str, int, float]] = None
    invoice_url: Optional[str] = None
    invoice_pdf: Optional[str] = None
