from datetime import datetime, timedelta, timezone

import pytest

from innkeep.services import housekeeping_reminder
from innkeep.services.housekeeping import HousekeepingService
from innkeep.services.housekeeping_reminder import (
    build_reminder_sms,
    build_reminder_text,
    run_housekeeping_reminder,
)
from innkeep.services.notifications import NotificationError
from innkeep.services.staff import StaffService

NOW = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def sent(monkeypatch):
    calls = {"email": [], "sms": []}

    def fake_email(to_email, to_name, subject, **kwargs):
        calls["email"].append({"to": to_email, "name": to_name, "subject": subject, **kwargs})
        return "msg-1"

    def fake_sms(to_phone, body):
        calls["sms"].append({"to": to_phone, "body": body})
        return "SM1"

    monkeypatch.setattr(housekeeping_reminder, "send_email", fake_email)
    monkeypatch.setattr(housekeeping_reminder, "send_sms", fake_sms)
    return calls


def _staff(db, hotel, first, email=None, phone=None):
    return StaffService(db).create({
        "property_id": hotel.id, "first_name": first, "last_name": "Test",
        "email": email, "phone_number": phone, "role": "housekeeper",
    })


def _overdue(db, room, staff=None, **extra):
    return HousekeepingService(db).create({
        "property_id": room.property_id,
        "room_id": room.id,
        "assigned_to": staff.id if staff else None,
        "due_by": NOW - timedelta(hours=1),
        **extra,
    })


def test_groups_by_staff_and_prefers_email(db, hotel, rooms, housekeeper, sent):
    _overdue(db, rooms[0], housekeeper, priority="low")
    _overdue(db, rooms[1], housekeeper, priority="urgent", notes="Guest waiting")
    _overdue(db, rooms[1])  # unassigned

    result = run_housekeeping_reminder(db, now=NOW)

    assert result["success"] is True
    assert result["propertyId"] is None
    assert result["checkOverdueOnly"] is True
    assert result["timestamp"] == NOW.isoformat()
    assert result["notificationsCount"] == 1
    assert result["notifications"] == [{"staffId": housekeeper.id, "success": True, "method": "email"}]
    assert sent["sms"] == []

    email = sent["email"][0]
    assert email["to"] == "ana@innkeep.test"
    assert email["subject"] == "Housekeeping Tasks Reminder for Grand Plaza"
    assert email["from_name"] == "Grand Plaza"
    data = email["dynamic_template_data"]
    assert data["overdue_count"] == 2
    assert [t["room"] for t in data["tasks"]] == ["102", "101"]
    assert data["tasks"][0] == {"room": "102", "priority": "URGENT", "due": "2026-10-17 08:00", "notes": "Guest waiting"}


def test_sms_when_no_email(db, hotel, rooms, sent):
    night = _staff(db, hotel, "Rita", phone="+15553334444")
    _overdue(db, rooms[0], night)

    result = run_housekeeping_reminder(db, now=NOW)

    assert result["notifications"] == [{"staffId": night.id, "success": True, "method": "sms"}]
    assert sent["sms"] == [{
        "to": "+15553334444",
        "body": "Rita Test, you have 1 housekeeping tasks at Grand Plaza that need attention. Please check the app for details.",
    }]


def test_sms_fallback_when_email_fails(db, hotel, rooms, housekeeper, sent, monkeypatch):
    def failing_email(*args, **kwargs):
        raise NotificationError("SendGrid API error: Unauthorized")

    monkeypatch.setattr(housekeeping_reminder, "send_email", failing_email)
    _overdue(db, rooms[0], housekeeper)

    result = run_housekeeping_reminder(db, now=NOW)
    assert result["notifications"] == [{"staffId": housekeeper.id, "success": True, "method": "sms"}]
    assert len(sent["sms"]) == 1


def test_no_contact_method(db, hotel, rooms, sent):
    ghost = _staff(db, hotel, "Nobody")
    _overdue(db, rooms[0], ghost)

    result = run_housekeeping_reminder(db, now=NOW)
    assert result["notifications"] == [
        {"staffId": ghost.id, "success": False, "method": "failed", "error": "No contact method available"}
    ]


def test_sms_failure_is_reported(db, hotel, rooms, sent, monkeypatch):
    def failing_sms(*args, **kwargs):
        raise NotificationError("Missing Twilio configuration")

    monkeypatch.setattr(housekeeping_reminder, "send_sms", failing_sms)
    night = _staff(db, hotel, "Rita", phone="+15553334444")
    _overdue(db, rooms[0], night)

    result = run_housekeeping_reminder(db, now=NOW)
    assert result["notifications"][0]["success"] is False
    assert result["notifications"][0]["error"] == "Missing Twilio configuration"


def test_check_all_open_tasks(db, hotel, rooms, housekeeper, sent):
    HousekeepingService(db).create({
        "property_id": hotel.id, "room_id": rooms[0].id, "assigned_to": housekeeper.id,
        "due_by": NOW + timedelta(hours=2),
    })
    assert run_housekeeping_reminder(db, now=NOW)["notificationsCount"] == 0

    result = run_housekeeping_reminder(db, property_id=hotel.id, check_overdue_only=False, now=NOW)
    assert result["propertyId"] == hotel.id
    assert result["notificationsCount"] == 1


def test_plain_text_body():
    notification = housekeeping_reminder.StaffNotification(
        staff_id=1, email="a@b.c", phone_number=None, name="Ana Silva",
        property_id=1, property_name="Grand Plaza",
        requests=[
            housekeeping_reminder.ReminderTask(1, "101", "high", datetime(2026, 10, 17, 8, 0), "Extra bed"),
            housekeeping_reminder.ReminderTask(2, "102", "low", datetime(2026, 10, 17, 9, 30), None),
        ],
    )
    assert build_reminder_text(notification) == (
        "Hello Ana Silva,\n\n"
        "You have 2 housekeeping tasks that need attention at Grand Plaza:\n\n"
        "- Room 101: HIGH priority, due by 2026-10-17 08:00 (Extra bed)\n"
        "- Room 102: LOW priority, due by 2026-10-17 09:30\n\n"
        "Please complete these tasks as soon as possible.\n\n"
        "Thank you,\nGrand Plaza Management"
    )
    assert build_reminder_sms(notification).startswith("Ana Silva, you have 2 housekeeping tasks at Grand Plaza")


def test_task_created_as_completed_is_not_reminded(db, hotel, rooms, housekeeper, sent):
    _overdue(db, rooms[0], housekeeper, status="completed")

    result = run_housekeeping_reminder(db, now=NOW)

    assert result["notificationsCount"] == 0
    assert sent == {"email": [], "sms": []}
