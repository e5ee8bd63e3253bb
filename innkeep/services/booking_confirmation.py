"""Booking confirmation email for a guest, sent through SendGrid."""
import logging
from datetime import date, datetime
from html import escape
from typing import Any

from innkeep.config import get_settings
from innkeep.schemas.booking import BookingEmailPayload
from innkeep.services.notifications import NotificationError, send_email

logger = logging.getLogger(__name__)


class BookingConfirmationError(Exception):
    """Carries the HTTP status the functions router responds with."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def format_date(value: str | None) -> str:
    """ISO date or datetime -> MM/DD/YYYY; anything else is passed through."""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        try:
            parsed = date.fromisoformat(value[:10])
        except ValueError:
            return value
    return parsed.strftime("%m/%d/%Y")


def template_data(payload: BookingEmailPayload) -> dict[str, Any]:
    return {
        "guest_name": payload.guestName or "",
        "property_name": payload.propertyName or "",
        "confirmation_code": payload.confirmationCode,
        "check_in_date": format_date(payload.checkInDate),
        "check_out_date": format_date(payload.checkOutDate),
        "room_type": payload.roomType or "",
        "total_amount": f"{payload.totalAmount or 0:.2f}",
        "currency": payload.currency or "",
        "booking_id": payload.bookingId,
    }


def render_html(data: dict[str, Any]) -> str:
    """Built-in email body used when no SendGrid template is configured."""
    v = {k: escape(str(val if val is not None else "")) for k, val in data.items()}
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Booking Confirmation</title>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ text-align: center; padding: 20px 0; border-bottom: 1px solid #eee; }}
    .booking-details {{ background-color: #f9f9f9; padding: 15px; border-radius: 5px; margin: 20px 0; }}
    .footer {{ text-align: center; padding: 20px 0; border-top: 1px solid #eee; font-size: 12px; color: #777; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h1>Booking Confirmation</h1></div>
    <div class="content">
      <p>Dear {v['guest_name']},</p>
      <p>Thank you for your reservation at {v['property_name']}. Your booking has been confirmed!</p>
      <div class="booking-details">
        <h3>Booking Details</h3>
        <p><strong>Confirmation Code:</strong> {v['confirmation_code']}</p>
        <p><strong>Check-in Date:</strong> {v['check_in_date']}</p>
        <p><strong>Check-out Date:</strong> {v['check_out_date']}</p>
        <p><strong>Room Type:</strong> {v['room_type']}</p>
        <p><strong>Total Amount:</strong> {v['currency']} {v['total_amount']}</p>
      </div>
      <p>If you need to modify or cancel your reservation, please contact us with your confirmation code.</p>
      <p>We look forward to welcoming you!</p>
      <p>Best regards,<br>{v['property_name']} Team</p>
    </div>
    <div class="footer">
      <p>This is an automated email. Please do not reply directly to this message.</p>
    </div>
  </div>
</body>
</html>
"""


def send_booking_confirmation(payload: BookingEmailPayload | dict[str, Any]) -> dict[str, Any]:
    """Send the confirmation; returns {success, messageId, bookingId} or raises BookingConfirmationError."""
    if isinstance(payload, dict):
        payload = BookingEmailPayload.model_validate(payload)
    if not payload.bookingId or not payload.guestEmail or not payload.confirmationCode:
        raise BookingConfirmationError(400, "Missing required fields")

    settings = get_settings()
    if not settings.sendgrid_api_key or not settings.from_email:
        logger.error("[SendGrid] booking confirmation skipped: SENDGRID_API_KEY / FROM_EMAIL not set")
        raise BookingConfirmationError(500, "Server configuration error")

    data = template_data(payload)
    template_id = settings.sendgrid_booking_template_id or None
    property_name = payload.propertyName or ""
    try:
        message_id = send_email(
            payload.guestEmail,
            payload.guestName,
            f"Booking Confirmation: {payload.confirmationCode}",
            from_name=property_name or None,
            html_content=None if template_id else render_html(data),
            template_id=template_id,
            dynamic_template_data=data,
            reply_to=(settings.from_email, f"{property_name} Support".strip()),
        )
    except NotificationError as e:
        logger.warning("[SendGrid] booking %s confirmation failed: %s", payload.bookingId, e)
        raise BookingConfirmationError(500, str(e)) from e

    return {"success": True, "messageId": message_id, "bookingId": payload.bookingId}
