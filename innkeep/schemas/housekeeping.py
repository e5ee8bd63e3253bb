"""Housekeeping schemas."""
from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict
from innkeep.models.housekeeping import HousekeepingStatus, HousekeepingPriority


class HousekeepingCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    property_id: int
    room_id: int
    status: HousekeepingStatus | None = None
    priority: HousekeepingPriority | None = None
    due_by: datetime | None = None
    assigned_to: int | None = None
    notes: str | None = None
    issue_type: str | None = None
    is_recurring: bool = False
    recurrence_pattern: str | None = None


class HousekeepingUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    priority: HousekeepingPriority | None = None
    due_by: datetime | None = None
    notes: str | None = None
    issue_type: str | None = None
    is_recurring: bool | None = None
    recurrence_pattern: str | None = None


class HousekeepingStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    status: HousekeepingStatus
    notes: str | None = None


class HousekeepingAssign(BaseModel):
    staff_id: int


class HousekeepingResponse(BaseModel):
    id: int
    property_id: int
    room_id: int
    assigned_to: int | None
    status: str
    priority: str
    requested_at: datetime
    due_by: datetime
    started_at: datetime | None
    completed_at: datetime | None
    notes: str | None
    issue_type: str | None
    is_recurring: bool
    recurrence_pattern: str | None

    class Config:
        from_attributes = True


class HousekeepingRecurring(BaseModel):
    """Omit room_ids for every active room of the property."""
    property_id: int
    pattern: Literal["daily", "weekly"]
    room_ids: list[int] | None = None
