"""Guest records: lookup, VIP / blacklist flags and tags."""
from sqlalchemy import or_

from innkeep.models.guest import Guest
from innkeep.services.base import BaseService


class GuestsService(BaseService[Guest]):
    model = Guest
    search_fields = ("first_name", "last_name", "email", "phone")
    filter_fields = ("first_name", "last_name", "email", "phone", "city", "country", "nationality", "vip", "blacklisted")

    def get_by_email(self, email: str) -> Guest | None:
        try:
            return self._query().filter(Guest.email == email).first()
        except Exception as e:
            self._handle_error(e)

    def get_by_phone(self, phone: str) -> Guest | None:
        try:
            return self._query().filter(Guest.phone == phone).first()
        except Exception as e:
            self._handle_error(e)

    def set_vip_status(self, id: int, vip: bool) -> Guest:
        return self.update(id, {"vip": bool(vip)})

    def set_blacklisted_status(self, id: int, blacklisted: bool, reason: str | None = None) -> Guest:
        data = {"blacklisted": bool(blacklisted)}
        if reason:
            data["notes"] = reason
        return self.update(id, data)

    def add_tags(self, id: int, tags: list[str]) -> Guest:
        guest = self.require(id)
        merged = list(dict.fromkeys([*(guest.tags or []), *tags]))
        return self.update(id, {"tags": merged})

    def remove_tags(self, id: int, tags: list[str]) -> Guest:
        guest = self.require(id)
        drop = set(tags)
        return self.update(id, {"tags": [t for t in (guest.tags or []) if t not in drop]})

    def search(self, term: str, limit: int = 10) -> list[Guest]:
        """Quick lookup for the booking form: name, email or phone."""
        pattern = f"%{term}%"
        try:
            return (
                self._query()
                .filter(
                    or_(
                        Guest.first_name.ilike(pattern),
                        Guest.last_name.ilike(pattern),
                        Guest.email.ilike(pattern),
                        Guest.phone.ilike(pattern),
                    )
                )
                .order_by(Guest.last_name, Guest.first_name)
                .limit(limit)
                .all()
            )
        except Exception as e:
            self._handle_error(e)
