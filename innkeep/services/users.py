"""Dashboard login accounts. Passwords are stored as bcrypt hashes."""
from typing import Any

from innkeep.errors import NotFoundError, ValidationFailed
from innkeep.models.user import User, UserRole
from innkeep.services.auth import get_password_hash, verify_password
from innkeep.services.base import BaseService


class UsersService(BaseService[User]):
    model = User
    search_fields = ("username",)
    filter_fields = ("username", "role", "staff_id")

    def create(self, data: dict[str, Any]) -> User:
        username = (data.get("username") or "").strip()
        password = data.get("password") or ""
        if not username or not password:
            raise ValidationFailed("Username and password are required")
        row = {**data, "username": username, "password": get_password_hash(password)}
        row["role"] = getattr(data.get("role"), "value", data.get("role")) or UserRole.user.value
        return super().create(row)

    def get_by_username(self, username: str) -> User | None:
        try:
            return self._query().filter(User.username == username).first()
        except Exception as e:
            self._handle_error(e)

    def update_by_id(self, id: int, data: dict[str, Any]) -> User:
        """Merge data onto the current row; a new password is re-hashed."""
        if self.get_by_id(id) is None:
            raise NotFoundError("User not found")
        # These columns cannot be cleared; None leaves them as they are
        data = {k: v for k, v in data.items() if v is not None or k not in ("username", "password", "role")}
        if data.get("password"):
            data["password"] = get_password_hash(data["password"])
        if "role" in data:
            data["role"] = getattr(data["role"], "value", data["role"])
        return self.update(id, data)

    def delete_by_id(self, id: int) -> None:
        if self.get_by_id(id) is None:
            raise NotFoundError("User not found")
        self.delete(id)

    def authenticate(self, username: str, password: str) -> User | None:
        user = self.get_by_username((username or "").strip())
        if user is None or not verify_password(password or "", user.password):
            return None
        return user
