from unittest.mock import MagicMock, patch

import pytest
from python_http_client.exceptions import HTTPError
from twilio.base.exceptions import TwilioRestException

from innkeep.config import get_settings
from innkeep.services.notifications import NotificationError, send_email, send_sms


def _response(status=202, headers=None):
    response = MagicMock()
    response.status_code = status
    response.headers = headers if headers is not None else {"X-Message-Id": "abc123"}
    return response


def test_send_email_returns_message_id():
    with patch("innkeep.services.notifications.SendGridAPIClient") as client_cls:
        client_cls.return_value.send.return_value = _response()
        message_id = send_email(
            "guest@example.com", "Guest", "Hello",
            from_name="Grand Plaza", text_content="Hi", reply_to=("frontdesk@innkeep.test", "Grand Plaza Support"),
        )
    assert message_id == "abc123"
    client_cls.assert_called_once_with("SG.test-key")
    mail = client_cls.return_value.send.call_args[0][0]
    body = mail.get()
    assert body["from"]["email"] == "frontdesk@innkeep.test"
    assert body["from"]["name"] == "Grand Plaza"
    assert body["reply_to"]["name"] == "Grand Plaza Support"


def test_send_email_sets_template():
    with patch("innkeep.services.notifications.SendGridAPIClient") as client_cls:
        client_cls.return_value.send.return_value = _response()
        send_email(
            "guest@example.com", None, "Hello", text_content="Hi",
            template_id="d-123", dynamic_template_data={"guest_name": "Rui"},
        )
    body = client_cls.return_value.send.call_args[0][0].get()
    assert body["template_id"] == "d-123"
    assert body["personalizations"][0]["dynamic_template_data"] == {"guest_name": "Rui"}


def test_send_email_requires_configuration(monkeypatch):
    monkeypatch.setattr(get_settings(), "from_email", "")
    with pytest.raises(NotificationError, match="Missing SendGrid configuration"):
        send_email("guest@example.com", None, "Hello", text_content="Hi")


def test_send_email_http_error_uses_first_message():
    error = HTTPError(400, "Bad Request", b'{"errors": [{"message": "Invalid to address"}]}', {})
    with patch("innkeep.services.notifications.SendGridAPIClient") as client_cls:
        client_cls.return_value.send.side_effect = error
        with pytest.raises(NotificationError) as exc:
            send_email("bad", None, "Hello", text_content="Hi")
    assert str(exc.value) == "SendGrid API error: Invalid to address"


def test_send_sms_returns_sid():
    with patch("innkeep.services.notifications.Client") as client_cls:
        client_cls.return_value.messages.create.return_value = MagicMock(sid="SM123")
        assert send_sms("+15551112222", "Rooms to clean") == "SM123"
    client_cls.assert_called_once_with("AC-test", "twilio-token")
    client_cls.return_value.messages.create.assert_called_once_with(
        body="Rooms to clean", from_="+15550000000", to="+15551112222"
    )


def test_send_sms_wraps_twilio_errors():
    with patch("innkeep.services.notifications.Client") as client_cls:
        client_cls.return_value.messages.create.side_effect = TwilioRestException(
            400, "/Messages", msg="The 'To' number is not valid", code=21211
        )
        with pytest.raises(NotificationError, match="Twilio API error: The 'To' number is not valid"):
            send_sms("+1", "x")


def test_send_sms_requires_configuration(monkeypatch):
    monkeypatch.setattr(get_settings(), "twilio_phone_number", "")
    with pytest.raises(NotificationError, match="Missing Twilio configuration"):
        send_sms("+15551112222", "x")
