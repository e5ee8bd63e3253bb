"""Properties (hotels) and their image gallery."""
from __future__ import annotations

from typing import Any

from innkeep.errors import ValidationFailed
from innkeep.models.property import Property, PropertyStatus
from innkeep.services.base import BaseService

_STATUSES = {s.value for s in PropertyStatus}


class PropertiesService(BaseService[Property]):
    model = Property
    search_fields = ("name", "city", "country", "address")
    filter_fields = ("owner_id", "name", "type", "city", "state", "country", "status", "star_rating")

    def create(self, data: dict[str, Any]) -> Property:
        data = {**data}
        if not data.get("status"):
            data["status"] = PropertyStatus.active.value
        return super().create(data)

    def list(self, filters=None, page=1, limit=20, search=None, sort=None):
        """star_rating_min / star_rating_max are range shorthands for star_rating_gte / _lte."""
        filters = dict(filters or {})
        if filters.get("star_rating_min") is not None:
            filters["star_rating_gte"] = filters.pop("star_rating_min")
        if filters.get("star_rating_max") is not None:
            filters["star_rating_lte"] = filters.pop("star_rating_max")
        filters.pop("star_rating_min", None)
        filters.pop("star_rating_max", None)
        return super().list(filters, page, limit, search, sort)

    def get_by_owner_id(self, owner_id: int) -> list[Property]:
        try:
            return self._query().filter(Property.owner_id == owner_id).order_by(Property.id).all()
        except Exception as e:
            self._handle_error(e)

    def update_status(self, id: int, status: str) -> Property:
        status = getattr(status, "value", status)
        if status not in _STATUSES:
            raise ValidationFailed(f"Invalid property status: {status}")
        return self.update(id, {"status": status})

    def add_image(self, id: int, image_url: str, is_featured: bool = False) -> Property:
        prop = self.require(id)
        data: dict[str, Any] = {"media_gallery": [*(prop.media_gallery or []), image_url]}
        if is_featured:
            data["featured_image_url"] = image_url
        return self.update(id, data)

    def remove_image(self, id: int, image_url: str) -> Property:
        prop = self.require(id)
        data: dict[str, Any] = {"media_gallery": [u for u in (prop.media_gallery or []) if u != image_url]}
        if prop.featured_image_url == image_url:
            data["featured_image_url"] = None
        return self.update(id, data)
