"""Housekeeping requests (room cleaning / maintenance tasks)."""
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from innkeep.database import Base
import enum


class HousekeepingStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"
    overdue = "overdue"


class HousekeepingPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


# Sort rank, highest first
PRIORITY_RANK = {
    HousekeepingPriority.urgent.value: 4,
    HousekeepingPriority.high.value: 3,
    HousekeepingPriority.medium.value: 2,
    HousekeepingPriority.low.value: 1,
}


class HousekeepingRequest(Base):
    __tablename__ = "housekeeping_requests"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_to = Column(Integer, ForeignKey("staff.id", ondelete="SET NULL"), nullable=True, index=True)

    status = Column(String(20), nullable=False, default=HousekeepingStatus.pending.value, index=True)
    priority = Column(String(20), nullable=False, default=HousekeepingPriority.medium.value)

    requested_at = Column(DateTime(timezone=True), nullable=False)
    due_by = Column(DateTime(timezone=True), nullable=False, index=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    notes = Column(Text, nullable=True)
    issue_type = Column(String(50), nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurrence_pattern = Column(String(50), nullable=True)  # daily, weekly

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    property = relationship("Property")
    room = relationship("Room")
    staff = relationship("Staff")
