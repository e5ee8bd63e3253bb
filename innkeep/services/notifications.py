"""Notification delivery: SendGrid email and Twilio SMS."""
import logging
from typing import Any

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, ReplyTo
from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client

from innkeep.config import get_settings

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    pass


def _sendgrid_error_message(error: HTTPError) -> str:
    """First entry of SendGrid's {"errors": [{"message": ...}]} body, else the HTTP reason."""
    try:
        body = error.to_dict or {}
        errors = body.get("errors") or []
        if errors and errors[0].get("message"):
            return errors[0]["message"]
    except (ValueError, AttributeError):
        pass
    return getattr(error, "reason", None) or str(error)


def send_email(
    to_email: str,
    to_name: str | None,
    subject: str,
    *,
    from_name: str | None = None,
    text_content: str | None = None,
    html_content: str | None = None,
    template_id: str | None = None,
    dynamic_template_data: dict[str, Any] | None = None,
    reply_to: tuple[str, str] | None = None,
) -> str:
    """Send one email through SendGrid. Returns the X-Message-Id header ("" when absent)."""
    settings = get_settings()
    if not settings.sendgrid_api_key or not settings.from_email:
        raise NotificationError("Missing SendGrid configuration")

    message = Mail(
        from_email=(settings.from_email, from_name) if from_name else settings.from_email,
        to_emails=(to_email, to_name) if to_name else to_email,
        subject=subject,
        plain_text_content=text_content,
        html_content=html_content,
    )
    if template_id:
        message.template_id = template_id
        if dynamic_template_data is not None:
            message.dynamic_template_data = dynamic_template_data
    if reply_to:
        message.reply_to = ReplyTo(*reply_to)

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except HTTPError as e:
        logger.warning("[SendGrid] send failed: to=%s status=%s", to_email, getattr(e, "status_code", None))
        raise NotificationError(f"SendGrid API error: {_sendgrid_error_message(e)}") from e

    if not 200 <= response.status_code < 300:
        logger.warning("[SendGrid] unexpected status: to=%s status=%s", to_email, response.status_code)
        raise NotificationError(f"SendGrid API error: {response.status_code}")

    headers = response.headers or {}
    message_id = headers.get("X-Message-Id") or headers.get("x-message-id") or ""
    logger.info("[SendGrid] sent: to=%s subject=%s id=%s", to_email, subject, message_id)
    return message_id


def send_sms(to_phone: str, body: str) -> str:
    """Send one SMS through Twilio. Returns the message SID."""
    settings = get_settings()
    if not settings.twilio_account_sid or not settings.twilio_auth_token or not settings.twilio_phone_number:
        raise NotificationError("Missing Twilio configuration")
    client = Client(settings.twilio_account_sid, settings.twilio_auth_token)
    try:
        message = client.messages.create(body=body, from_=settings.twilio_phone_number, to=to_phone)
    except TwilioRestException as e:
        logger.warning("[Twilio] send failed: to=%s code=%s", to_phone, e.code)
        raise NotificationError(f"Twilio API error: {e.msg}") from e
    logger.info("[Twilio] sent: to=%s sid=%s", to_phone, message.sid)
    return message.sid
