"""Rooms: status, activation and availability."""
from typing import Any

from innkeep.errors import ValidationFailed
from innkeep.models.room import Room, RoomStatus
from innkeep.services.base import BaseService

_STATUSES = {s.value for s in RoomStatus}


def _with_defaults(data: dict[str, Any]) -> dict[str, Any]:
    data = {**data}
    if not data.get("status"):
        data["status"] = RoomStatus.available.value
    if data.get("is_active") is None:
        data["is_active"] = True
    return data


class RoomsService(BaseService[Room]):
    model = Room
    search_fields = ("number", "category", "notes")
    filter_fields = ("property_id", "room_type_id", "number", "floor", "category", "capacity", "status", "is_active")

    def create(self, data: dict[str, Any]) -> Room:
        return super().create(_with_defaults(data))

    def bulk_create(self, rows: list[dict[str, Any]]) -> list[Room]:
        return super().bulk_create([_with_defaults(r) for r in rows])

    def get_by_property_id(self, property_id: int) -> list[Room]:
        try:
            return self._query().filter(Room.property_id == property_id).order_by(Room.number).all()
        except Exception as e:
            self._handle_error(e)

    def get_by_room_type_id(self, room_type_id: int) -> list[Room]:
        try:
            return self._query().filter(Room.room_type_id == room_type_id).order_by(Room.number).all()
        except Exception as e:
            self._handle_error(e)

    def update_status(self, id: int, status: str) -> Room:
        status = getattr(status, "value", status)
        if status not in _STATUSES:
            raise ValidationFailed(f"Invalid room status: {status}")
        return self.update(id, {"status": status})

    def toggle_active(self, id: int, is_active: bool) -> Room:
        return self.update(id, {"is_active": bool(is_active)})

    def get_available_rooms(self, property_id: int) -> list[Room]:
        try:
            return (
                self._query()
                .filter(
                    Room.property_id == property_id,
                    Room.status == RoomStatus.available.value,
                    Room.is_active.is_(True),
                )
                .order_by(Room.number)
                .all()
            )
        except Exception as e:
            self._handle_error(e)
