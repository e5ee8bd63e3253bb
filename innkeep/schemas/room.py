"""Room type and room schemas."""
from datetime import datetime
from typing import Any
from pydantic import BaseModel, ConfigDict
from innkeep.models.room import RoomStatus


class RoomTypeCreate(BaseModel):
    property_id: int
    name: str
    description: str | None = None
    base_rate: float | None = None
    capacity: int = 2
    amenities: list[str] | None = None


class RoomTypeUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    base_rate: float | None = None
    capacity: int | None = None
    amenities: list[str] | None = None


class RoomTypeResponse(BaseModel):
    id: int
    property_id: int
    name: str
    description: str | None
    base_rate: float | None
    capacity: int
    amenities: list[str] | None

    class Config:
        from_attributes = True


class RoomCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    property_id: int
    room_type_id: int | None = None
    number: str
    floor: int | None = None
    category: str | None = None
    capacity: int = 2
    status: RoomStatus | None = None
    is_active: bool | None = None
    notes: str | None = None
    amenities: list[str] | None = None
    dynamic_pricing: dict[str, Any] | None = None


class RoomUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    room_type_id: int | None = None
    number: str | None = None
    floor: int | None = None
    category: str | None = None
    capacity: int | None = None
    notes: str | None = None
    amenities: list[str] | None = None
    dynamic_pricing: dict[str, Any] | None = None
    maintenance_history: list[dict[str, Any]] | None = None


class RoomStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    status: RoomStatus


class RoomActiveUpdate(BaseModel):
    is_active: bool


class RoomResponse(BaseModel):
    id: int
    property_id: int
    room_type_id: int | None
    number: str
    floor: int | None
    category: str | None
    capacity: int
    status: str
    is_active: bool
    notes: str | None
    amenities: list[str] | None
    dynamic_pricing: dict[str, Any] | None
    maintenance_history: list[dict[str, Any]] | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
