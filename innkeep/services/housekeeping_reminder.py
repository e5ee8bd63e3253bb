"""Housekeeping reminder: notify each assigned staff member of their open (or overdue) tasks.

Runs daily from the scheduler in innkeep.main and on demand from
/functions/housekeeping-reminder. Email first, SMS when email is unavailable or fails.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from innkeep.config import get_settings
from innkeep.database import SessionLocal
from innkeep.models.housekeeping import HousekeepingRequest
from innkeep.services.housekeeping import HousekeepingService
from innkeep.services.notifications import NotificationError, send_email, send_sms

logger = logging.getLogger(__name__)


@dataclass
class ReminderTask:
    request_id: int
    room_number: str
    priority: str
    due_by: datetime
    notes: str | None


@dataclass
class StaffNotification:
    staff_id: int
    email: str | None
    phone_number: str | None
    name: str
    property_id: int
    property_name: str
    requests: list[ReminderTask] = field(default_factory=list)


def _format_due(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")


def group_by_staff(requests: list[HousekeepingRequest]) -> list[StaffNotification]:
    """One StaffNotification per assigned staff member, in first-seen order. Unassigned requests are skipped."""
    grouped: dict[int, StaffNotification] = {}
    for req in requests:
        staff = req.staff
        if staff is None:
            continue
        entry = grouped.get(staff.id)
        if entry is None:
            entry = grouped[staff.id] = StaffNotification(
                staff_id=staff.id,
                email=staff.email,
                phone_number=staff.phone_number,
                name=f"{staff.first_name} {staff.last_name}",
                property_id=req.property_id,
                property_name=req.property.name if req.property else "",
            )
        entry.requests.append(
            ReminderTask(
                request_id=req.id,
                room_number=req.room.number if req.room else "",
                priority=req.priority,
                due_by=req.due_by,
                notes=req.notes,
            )
        )
    return list(grouped.values())


def build_reminder_text(notification: StaffNotification) -> str:
    lines = "\n".join(
        f"- Room {t.room_number}: {t.priority.upper()} priority, due by {_format_due(t.due_by)}"
        + (f" ({t.notes})" if t.notes else "")
        for t in notification.requests
    )
    return (
        f"Hello {notification.name},\n\n"
        f"You have {len(notification.requests)} housekeeping tasks that need attention at {notification.property_name}:\n\n"
        f"{lines}\n\n"
        "Please complete these tasks as soon as possible.\n\n"
        f"Thank you,\n{notification.property_name} Management"
    )


def build_reminder_sms(notification: StaffNotification) -> str:
    return (
        f"{notification.name}, you have {len(notification.requests)} housekeeping tasks at "
        f"{notification.property_name} that need attention. Please check the app for details."
    )


def _template_data(notification: StaffNotification) -> dict[str, Any]:
    return {
        "staff_name": notification.name,
        "property_name": notification.property_name,
        "overdue_count": len(notification.requests),
        "tasks": [
            {
                "room": t.room_number,
                "priority": t.priority.upper(),
                "due": _format_due(t.due_by),
                "notes": t.notes or "",
            }
            for t in notification.requests
        ],
    }


def send_email_notification(notification: StaffNotification) -> str:
    settings = get_settings()
    return send_email(
        notification.email,
        notification.name,
        f"Housekeeping Tasks Reminder for {notification.property_name}",
        from_name=notification.property_name,
        text_content=build_reminder_text(notification),
        template_id=settings.sendgrid_housekeeping_template_id or None,
        dynamic_template_data=_template_data(notification),
    )


def send_sms_notification(notification: StaffNotification) -> str:
    return send_sms(notification.phone_number, build_reminder_sms(notification))


def notify_staff(notification: StaffNotification) -> dict[str, Any]:
    """Deliver one reminder. Failures are reported in the result, never raised."""
    email_error = None
    if notification.email:
        try:
            send_email_notification(notification)
            return {"staffId": notification.staff_id, "success": True, "method": "email"}
        except NotificationError as e:
            email_error = str(e)
            logger.warning("[Housekeeping] email to staff %s failed: %s", notification.staff_id, e)
    if notification.phone_number:
        try:
            send_sms_notification(notification)
            return {"staffId": notification.staff_id, "success": True, "method": "sms"}
        except NotificationError as e:
            logger.warning("[Housekeeping] SMS to staff %s failed: %s", notification.staff_id, e)
            return {"staffId": notification.staff_id, "success": False, "method": "failed", "error": str(e)}
    error = email_error or "No contact method available"
    logger.warning("[Housekeeping] could not notify staff %s: %s", notification.staff_id, error)
    return {"staffId": notification.staff_id, "success": False, "method": "failed", "error": error}


def run_housekeeping_reminder(
    db: Session,
    property_id: int | None = None,
    check_overdue_only: bool = True,
    now: datetime | None = None,
) -> dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    requests = HousekeepingService(db).get_reminder_candidates(
        property_id=property_id, overdue_only=check_overdue_only, now=now
    )
    results = [notify_staff(n) for n in group_by_staff(requests)]
    return {
        "success": True,
        "timestamp": now.isoformat(),
        "propertyId": property_id,
        "checkOverdueOnly": check_overdue_only,
        "notificationsCount": len(results),
        "notifications": results,
    }


def run_housekeeping_reminder_job() -> None:
    """Scheduler entry point: overdue tasks across all properties."""
    db = SessionLocal()
    try:
        result = run_housekeeping_reminder(db)
        sent = sum(1 for n in result["notifications"] if n["success"])
        logger.info("[Housekeeping] reminders: %s sent, %s failed", sent, result["notificationsCount"] - sent)
    except Exception:
        logger.exception("[Housekeeping] reminder job failed")
    finally:
        db.close()
