"""Guest schemas."""
from datetime import datetime
from typing import Any
from pydantic import BaseModel


class GuestCreate(BaseModel):
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    nationality: str | None = None
    id_type: str | None = None
    id_number: str | None = None
    notes: str | None = None
    tags: list[str] | None = None
    preferences: dict[str, Any] | None = None
    loyalty_info: dict[str, Any] | None = None
    vip: bool = False


class GuestUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    nationality: str | None = None
    id_type: str | None = None
    id_number: str | None = None
    notes: str | None = None
    preferences: dict[str, Any] | None = None
    loyalty_info: dict[str, Any] | None = None


class GuestVipUpdate(BaseModel):
    vip: bool


class GuestBlacklistUpdate(BaseModel):
    blacklisted: bool
    reason: str | None = None


class GuestTags(BaseModel):
    tags: list[str]


class GuestResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str | None
    phone: str | None
    address: str | None
    city: str | None
    country: str | None
    nationality: str | None
    id_type: str | None
    id_number: str | None
    notes: str | None
    tags: list[str] | None
    preferences: dict[str, Any] | None
    loyalty_info: dict[str, Any] | None
    vip: bool
    blacklisted: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
