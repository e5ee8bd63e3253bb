"""Property owner accounts."""
from typing import Any

from sqlalchemy import or_

from innkeep.models.property_owner import PropertyOwner
from innkeep.services.base import BaseService


class PropertyOwnerService(BaseService[PropertyOwner]):
    model = PropertyOwner
    search_fields = ("full_name", "email")
    filter_fields = ("email", "role", "full_name")

    def create_owner(self, data: dict[str, Any]) -> PropertyOwner:
        return self.create(data)

    def update_owner(self, id: int, data: dict[str, Any]) -> PropertyOwner:
        return self.update(id, data)

    def get_owner_by_id(self, id: int) -> PropertyOwner:
        return self.require(id)

    def get_all_owners(self) -> list[PropertyOwner]:
        return self.get_all()

    def delete_owner(self, id: int) -> None:
        self.delete(id)

    def get_owners_by_filters(
        self,
        email: str | None = None,
        role: str | None = None,
        search: str | None = None,
    ) -> list[PropertyOwner]:
        query = self._query()
        if email:
            query = query.filter(PropertyOwner.email == email)
        if role:
            query = query.filter(PropertyOwner.role == role)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(PropertyOwner.full_name.ilike(pattern), PropertyOwner.email.ilike(pattern)))
        try:
            return query.order_by(PropertyOwner.id).all()
        except Exception as e:
            self._handle_error(e)
