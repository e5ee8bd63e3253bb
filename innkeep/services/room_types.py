"""Room types (categories with a base rate) per property."""
from innkeep.models.room import RoomType
from innkeep.services.base import BaseService


class RoomTypesService(BaseService[RoomType]):
    model = RoomType
    search_fields = ("name", "description")
    filter_fields = ("property_id", "name", "capacity", "base_rate")

    def get_by_property_id(self, property_id: int) -> list[RoomType]:
        try:
            return self._query().filter(RoomType.property_id == property_id).order_by(RoomType.name).all()
        except Exception as e:
            self._handle_error(e)
