"""Staff members."""
from typing import Any

from innkeep.models.staff import Staff
from innkeep.services.base import BaseService


class StaffService(BaseService[Staff]):
    model = Staff
    search_fields = ("first_name", "last_name", "email", "role")
    filter_fields = ("property_id", "first_name", "last_name", "email", "role", "is_active")

    def get_by_email(self, email: str) -> Staff | None:
        try:
            return self._query().filter(Staff.email == email).first()
        except Exception as e:
            self._handle_error(e)

    def get_by_property_id(self, property_id: int) -> list[Staff]:
        try:
            return (
                self._query()
                .filter(Staff.property_id == property_id)
                .order_by(Staff.last_name, Staff.first_name)
                .all()
            )
        except Exception as e:
            self._handle_error(e)

    def update_schedule(self, id: int, schedule: dict[str, Any]) -> Staff:
        return self.update(id, {"schedule": schedule})

    def set_active(self, id: int, is_active: bool) -> Staff:
        return self.update(id, {"is_active": bool(is_active)})
