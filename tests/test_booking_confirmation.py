import pytest

from innkeep.config import get_settings
from innkeep.services import booking_confirmation
from innkeep.services.booking_confirmation import (
    BookingConfirmationError,
    format_date,
    render_html,
    send_booking_confirmation,
    template_data,
)
from innkeep.schemas.booking import BookingEmailPayload
from innkeep.services.notifications import NotificationError

PAYLOAD = {
    "bookingId": "42",
    "guestEmail": "rui@example.com",
    "guestName": "Rui Lopes",
    "propertyName": "Grand Plaza",
    "checkInDate": "2026-10-20",
    "checkOutDate": "2026-10-22T00:00:00Z",
    "roomType": "Deluxe",
    "totalAmount": 410.5,
    "currency": "EUR",
    "confirmationCode": "K7P2QX",
}


@pytest.fixture
def outbox(monkeypatch):
    sent = []

    def fake_send(to_email, to_name, subject, **kwargs):
        sent.append({"to": to_email, "name": to_name, "subject": subject, **kwargs})
        return "sg-message-id"

    monkeypatch.setattr(booking_confirmation, "send_email", fake_send)
    return sent


def test_success(outbox):
    assert send_booking_confirmation(PAYLOAD) == {"success": True, "messageId": "sg-message-id", "bookingId": "42"}

    email = outbox[0]
    assert email["to"] == "rui@example.com"
    assert email["subject"] == "Booking Confirmation: K7P2QX"
    assert email["from_name"] == "Grand Plaza"
    assert email["reply_to"] == ("frontdesk@innkeep.test", "Grand Plaza Support")
    assert email["template_id"] is None
    assert "K7P2QX" in email["html_content"]
    assert email["dynamic_template_data"]["total_amount"] == "410.50"


def test_uses_configured_template(outbox, monkeypatch):
    monkeypatch.setattr(get_settings(), "sendgrid_booking_template_id", "d-booking")
    send_booking_confirmation(PAYLOAD)
    assert outbox[0]["template_id"] == "d-booking"
    assert outbox[0]["html_content"] is None


@pytest.mark.parametrize("missing", ["bookingId", "guestEmail", "confirmationCode"])
def test_missing_required_fields(outbox, missing):
    with pytest.raises(BookingConfirmationError) as exc:
        send_booking_confirmation({**PAYLOAD, missing: ""})
    assert exc.value.status_code == 400
    assert exc.value.message == "Missing required fields"
    assert outbox == []


def test_missing_configuration(outbox, monkeypatch):
    monkeypatch.setattr(get_settings(), "sendgrid_api_key", "")
    with pytest.raises(BookingConfirmationError) as exc:
        send_booking_confirmation(PAYLOAD)
    assert (exc.value.status_code, exc.value.message) == (500, "Server configuration error")


def test_delivery_failure(monkeypatch):
    def failing(*args, **kwargs):
        raise NotificationError("SendGrid API error: The from address does not match a verified Sender Identity")

    monkeypatch.setattr(booking_confirmation, "send_email", failing)
    with pytest.raises(BookingConfirmationError) as exc:
        send_booking_confirmation(PAYLOAD)
    assert exc.value.status_code == 500
    assert exc.value.message.startswith("SendGrid API error:")


def test_template_data_formats_values():
    data = template_data(BookingEmailPayload(**PAYLOAD))
    assert data["check_in_date"] == "10/20/2026"
    assert data["check_out_date"] == "10/22/2026"
    assert data["total_amount"] == "410.50"
    assert data["booking_id"] == "42"


def test_format_date_passthrough():
    assert format_date("next tuesday") == "next tuesday"
    assert format_date(None) == ""


def test_html_escapes_values():
    html = render_html({**template_data(BookingEmailPayload(**PAYLOAD)), "guest_name": "<b>Rui</b>"})
    assert "&lt;b&gt;Rui&lt;/b&gt;" in html
    assert "This is an automated email." in html
