"""Staff schemas."""
from datetime import datetime
from typing import Any
from pydantic import BaseModel


class StaffCreate(BaseModel):
    property_id: int | None = None
    first_name: str
    last_name: str
    email: str | None = None
    phone_number: str | None = None
    role: str
    is_active: bool = True
    schedule: dict[str, Any] | None = None
    employment_details: dict[str, Any] | None = None
    access_permissions: dict[str, Any] | None = None


class StaffUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    property_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    role: str | None = None
    employment_details: dict[str, Any] | None = None
    access_permissions: dict[str, Any] | None = None


class StaffSchedule(BaseModel):
    schedule: dict[str, Any]


class StaffActiveUpdate(BaseModel):
    is_active: bool


class StaffResponse(BaseModel):
    id: int
    property_id: int | None
    first_name: str
    last_name: str
    email: str | None
    phone_number: str | None
    role: str
    is_active: bool
    schedule: dict[str, Any] | None
    employment_details: dict[str, Any] | None
    access_permissions: dict[str, Any] | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
