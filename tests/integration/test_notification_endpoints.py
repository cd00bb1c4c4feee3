import pytest
from httpx import ASGITransport, AsyncClient

from email_api.exceptions import DeliveryError
from tests.fixtures.app_factory import FRONTEND_URL, create_test_app


class RejectingSender:
    async def send(self, message):
        raise DeliveryError("email provider rejected the message", details="HTTP 401")


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.asyncio
async def test_transfer_notification(test_app):
    app, store, sender = test_app
    async with _client(app) as http:
        resp = await http.post(
            "/api/send-transfer-notification",
            json={
                "email": "new@owner.com",
                "transferId": "tr-1",
                "trackerDetails": {"imei": "356938035643809", "vehicleName": "Golf"},
                "fromUserName": "Alex",
                "subscriptionEndDate": "2025-06-01T00:00:00.000Z",
            },
        )
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "message": "Transfer notification email sent successfully",
        }
    message = sender.sent[0]
    assert f"{FRONTEND_URL}/transfer/accept?id=tr-1" in message.text
    assert "1 June 2025" in message.text
    assert await store.size() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"transferId": "t", "trackerDetails": {"imei": "1"}},
        {"email": "a@b.com", "trackerDetails": {"imei": "1"}},
        {"email": "a@b.com", "transferId": "t"},
        {"email": "a@b.com", "transferId": "t", "trackerDetails": {"imei": "1"}, "subscriptionEndDate": "soon"},
    ],
)
async def test_transfer_notification_bad_requests(test_app, payload):
    app, _, sender = test_app
    async with _client(app) as http:
        resp = await http.post("/api/send-transfer-notification", json=payload)
        assert resp.status_code == 400
        assert resp.json()["success"] is False
    assert sender.sent == []


@pytest.mark.asyncio
async def test_device_added(test_app):
    app, _, sender = test_app
    async with _client(app) as http:
        resp = await http.post(
            "/api/send-device-added",
            json={"email": "a@b.com", "firstName": "Sam", "vehicleName": "Golf", "planName": "Yearly", "planPrice": 79.99},
        )
        assert resp.status_code == 200
        resp = await http.post("/api/send-device-added", json={"email": "a@b.com"})
        assert resp.status_code == 400
    assert len(sender.sent) == 1
    assert "79.99" in sender.sent[0].text


@pytest.mark.asyncio
async def test_invoice(test_app):
    app, _, sender = test_app
    async with _client(app) as http:
        resp = await http.post(
            "/api/send-invoice",
            json={"email": "a@b.com", "invoiceId": "INV-7", "amount": "£7.99", "invoiceUrl": "https://pay.test/7"},
        )
        assert resp.status_code == 200
        resp = await http.post("/api/send-invoice", json={"email": "a@b.com", "invoiceId": "INV-7"})
        assert resp.status_code == 400
    assert len(sender.sent) == 1


@pytest.mark.asyncio
async def test_delivery_failure_is_500_with_details_and_token_kept():
    app, store, _ = create_test_app(sender=RejectingSender())
    async with _client(app) as http:
        resp = await http.post("/api/send-verification", json={"email": "a@b.com"})
        assert resp.status_code == 500
        assert resp.json() == {
            "success": False,
            "error": "email provider rejected the message",
            "details": "HTTP 401",
        }
        resp = await http.post(
            "/api/send-invoice",
            json={"email": "a@b.com", "invoiceId": "1", "amount": 5, "invoiceUrl": "https://pay.test/1"},
        )
        assert resp.status_code == 500
    assert await store.size() == 1
