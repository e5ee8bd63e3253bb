"""Login and user schemas."""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
from innkeep.models.user import UserRole


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserLogin(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return (v or "").strip()


class UserCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    username: str
    password: str
    staff_id: int | None = None
    role: UserRole | None = None


class UserUpdate(BaseModel):
    """All optional; a new password is re-hashed."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    username: str | None = None
    password: str | None = None
    staff_id: int | None = None
    role: UserRole | None = None


class UserResponse(BaseModel):
    id: int
    username: str
    staff_id: int | None
    role: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True
