"""Housekeeping requests: assignment, status transitions, overdue checks and statistics."""
import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy import case
from sqlalchemy.orm import joinedload

from innkeep.database import SessionLocal
from innkeep.errors import ValidationFailed
from innkeep.models.housekeeping import (
    PRIORITY_RANK,
    HousekeepingPriority,
    HousekeepingRequest,
    HousekeepingStatus,
)
from innkeep.models.room import Room
from innkeep.services.base import BaseService

DEFAULT_DUE_AFTER = timedelta(hours=3)
RECURRENCE_PATTERNS = ("daily", "weekly")

logger = logging.getLogger(__name__)
_STATUSES = {s.value for s in HousekeepingStatus}
_CLOSED = (HousekeepingStatus.completed.value, HousekeepingStatus.cancelled.value)

# urgent > high > medium > low; unknown values sort last
priority_rank = case(PRIORITY_RANK, value=HousekeepingRequest.priority, else_=0)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HousekeepingService(BaseService[HousekeepingRequest]):
    model = HousekeepingRequest
    search_fields = ("notes", "issue_type")
    filter_fields = (
        "property_id", "room_id", "assigned_to", "status", "priority",
        "issue_type", "is_recurring", "due_by", "requested_at",
    )

    @staticmethod
    def _status_stamps(status: str, now: datetime) -> dict[str, Any]:
        if status == HousekeepingStatus.in_progress.value:
            return {"started_at": now}
        if status == HousekeepingStatus.completed.value:
            return {"completed_at": now}
        return {}

    def _by_priority(self, query):
        return query.order_by(priority_rank.desc(), HousekeepingRequest.due_by.asc(), HousekeepingRequest.id)

    def create(self, data: dict[str, Any]) -> HousekeepingRequest:
        data = {**data}
        requested_at = data.get("requested_at") or _utcnow()
        data["requested_at"] = requested_at
        if data.get("due_by") is None:
            data["due_by"] = requested_at + DEFAULT_DUE_AFTER
        if not data.get("status"):
            data["status"] = HousekeepingStatus.pending.value
        for key, value in self._status_stamps(data["status"], _utcnow()).items():
            data.setdefault(key, value)
        if not data.get("priority"):
            data["priority"] = HousekeepingPriority.medium.value
        return super().create(data)

    def update_status(self, id: int, status: str, notes: str | None = None) -> HousekeepingRequest:
        status = getattr(status, "value", status)
        if status not in _STATUSES:
            raise ValidationFailed(f"Invalid housekeeping status: {status}")
        data: dict[str, Any] = {"status": status, **self._status_stamps(status, _utcnow())}
        if notes:
            data["notes"] = notes
        return self.update(id, data)

    def assign_to_staff(self, id: int, staff_id: int) -> HousekeepingRequest:
        return self.update(id, {"assigned_to": staff_id})

    def create_recurring_tasks(
        self,
        property_id: int,
        pattern: str,
        room_ids: list[int] | None = None,
        now: datetime | None = None,
    ) -> int:
        """Open one recurring cleaning task per room; returns how many were created.

        room_ids defaults to every active room of the property. Rooms of other properties are
        rejected. A room that still has an open task with the same pattern is skipped.
        """
        if pattern not in RECURRENCE_PATTERNS:
            raise ValidationFailed(f"Invalid recurrence pattern: {pattern}")
        now = now or _utcnow()
        try:
            query = self.db.query(Room).filter(Room.property_id == property_id, Room.is_active.is_(True))
            if room_ids is not None:
                query = query.filter(Room.id.in_(room_ids))
            rooms = query.order_by(Room.id).all()
            open_rooms = {
                room_id
                for (room_id,) in self._query()
                .with_entities(HousekeepingRequest.room_id)
                .filter(
                    HousekeepingRequest.property_id == property_id,
                    HousekeepingRequest.is_recurring.is_(True),
                    HousekeepingRequest.recurrence_pattern == pattern,
                    HousekeepingRequest.status.notin_(_CLOSED),
                )
            }
        except Exception as e:
            self._handle_error(e)
        if room_ids is not None:
            foreign = sorted(set(room_ids) - {r.id for r in rooms})
            if foreign:
                raise ValidationFailed(
                    f"Rooms not active in property {property_id}: {', '.join(str(i) for i in foreign)}"
                )
        rows = [
            {
                "property_id": property_id,
                "room_id": room.id,
                "status": HousekeepingStatus.pending.value,
                "priority": HousekeepingPriority.medium.value,
                "issue_type": "cleaning",
                "is_recurring": True,
                "recurrence_pattern": pattern,
                "requested_at": now,
                "due_by": now + DEFAULT_DUE_AFTER,
            }
            for room in rooms
            if room.id not in open_rooms
        ]
        if rows:
            self.bulk_create(rows)
        return len(rows)

    def renew_recurring_tasks(self, pattern: str, now: datetime | None = None) -> int:
        """Re-open the pattern's task for every active room that has had one and has none open now."""
        try:
            enrolled = (
                self._query()
                .join(Room, Room.id == HousekeepingRequest.room_id)
                .with_entities(HousekeepingRequest.property_id, HousekeepingRequest.room_id)
                .filter(
                    HousekeepingRequest.is_recurring.is_(True),
                    HousekeepingRequest.recurrence_pattern == pattern,
                    Room.is_active.is_(True),
                )
                .distinct()
                .all()
            )
        except Exception as e:
            self._handle_error(e)
        by_property: dict[int, list[int]] = defaultdict(list)
        for property_id, room_id in enrolled:
            by_property[property_id].append(room_id)
        return sum(
            self.create_recurring_tasks(property_id, pattern, room_ids, now)
            for property_id, room_ids in sorted(by_property.items())
        )

    def get_overdue_requests(self, property_id: int, now: datetime | None = None) -> list[HousekeepingRequest]:
        now = now or _utcnow()
        query = self._query().filter(
            HousekeepingRequest.property_id == property_id,
            HousekeepingRequest.status == HousekeepingStatus.pending.value,
            HousekeepingRequest.due_by < now,
        )
        try:
            return self._by_priority(query).all()
        except Exception as e:
            self._handle_error(e)

    def get_requests_for_staff(self, staff_id: int, status: str | None = None) -> list[HousekeepingRequest]:
        query = self._query().filter(HousekeepingRequest.assigned_to == staff_id)
        if status:
            query = query.filter(HousekeepingRequest.status == getattr(status, "value", status))
        try:
            return self._by_priority(query).all()
        except Exception as e:
            self._handle_error(e)

    def get_requests_for_room(self, room_id: int, limit: int = 10) -> list[HousekeepingRequest]:
        try:
            return (
                self._query()
                .filter(HousekeepingRequest.room_id == room_id)
                .order_by(HousekeepingRequest.requested_at.desc(), HousekeepingRequest.id.desc())
                .limit(limit)
                .all()
            )
        except Exception as e:
            self._handle_error(e)

    def get_reminder_candidates(
        self,
        property_id: int | None = None,
        overdue_only: bool = True,
        now: datetime | None = None,
    ) -> list[HousekeepingRequest]:
        """Open requests (not completed) with staff, room and property loaded, priority first."""
        query = (
            self._query()
            .options(
                joinedload(HousekeepingRequest.staff),
                joinedload(HousekeepingRequest.room),
                joinedload(HousekeepingRequest.property),
            )
            .filter(HousekeepingRequest.completed_at.is_(None))
        )
        if property_id is not None:
            query = query.filter(HousekeepingRequest.property_id == property_id)
        if overdue_only:
            query = query.filter(HousekeepingRequest.due_by < (now or _utcnow()))
        try:
            return self._by_priority(query).all()
        except Exception as e:
            self._handle_error(e)

    def count_open(self, property_id: int) -> int:
        try:
            return (
                self._query()
                .filter(HousekeepingRequest.property_id == property_id, HousekeepingRequest.status.notin_(_CLOSED))
                .count()
            )
        except Exception as e:
            self._handle_error(e)

    def get_property_statistics(
        self,
        property_id: int,
        start: date,
        end: date,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """Totals for requests raised between start and end (inclusive dates)."""
        now = now or _utcnow()
        window_start = datetime.combine(start, time.min, tzinfo=timezone.utc)
        window_end = datetime.combine(end + timedelta(days=1), time.min, tzinfo=timezone.utc)
        overdue_ids: set[int] = set()
        try:
            rows = (
                self._query()
                .options(joinedload(HousekeepingRequest.staff))
                .filter(
                    HousekeepingRequest.property_id == property_id,
                    HousekeepingRequest.requested_at >= window_start,
                    HousekeepingRequest.requested_at < window_end,
                )
                .order_by(HousekeepingRequest.id)
                .all()
            )
            if rows:
                overdue_ids = {
                    r.id
                    for r in self._query()
                    .with_entities(HousekeepingRequest.id)
                    .filter(
                        HousekeepingRequest.id.in_([row.id for row in rows]),
                        HousekeepingRequest.status.notin_(_CLOSED),
                        HousekeepingRequest.due_by < now,
                    )
                }
        except Exception as e:
            self._handle_error(e)

        completed = [r for r in rows if r.status == HousekeepingStatus.completed.value]
        durations = [
            (r.completed_at - r.requested_at).total_seconds() / 60
            for r in completed
            if r.completed_at is not None and r.requested_at is not None
        ]
        by_priority: dict[str, int] = defaultdict(int)
        by_staff: dict[int, dict[str, Any]] = {}
        for r in rows:
            by_priority[r.priority] += 1
            if r.assigned_to is None:
                continue
            entry = by_staff.setdefault(
                r.assigned_to,
                {
                    "staff_id": r.assigned_to,
                    "staff_name": r.staff.full_name if r.staff else "",
                    "completed": 0,
                    "pending": 0,
                },
            )
            if r.status == HousekeepingStatus.completed.value:
                entry["completed"] += 1
            elif r.status not in _CLOSED:
                entry["pending"] += 1

        return {
            "totalRequests": len(rows),
            "completedRequests": len(completed),
            "pendingRequests": sum(1 for r in rows if r.status == HousekeepingStatus.pending.value),
            "overdueRequests": len(overdue_ids),
            "averageCompletionTime": round(sum(durations) / len(durations), 1) if durations else 0,
            "tasksByPriority": dict(by_priority),
            "tasksByStaff": list(by_staff.values()),
        }


def run_recurring_tasks_job() -> None:
    """Scheduler entry point: daily tasks every day, weekly tasks on Mondays."""
    db = SessionLocal()
    try:
        service = HousekeepingService(db)
        now = _utcnow()
        created = service.renew_recurring_tasks("daily", now)
        if now.weekday() == 0:
            created += service.renew_recurring_tasks("weekly", now)
        logger.info("[Housekeeping] recurring tasks created: %s", created)
    except Exception:
        logger.exception("[Housekeeping] recurring task job failed")
    finally:
        db.close()

