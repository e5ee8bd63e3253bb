"""Room types and rooms."""
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from innkeep.database import Base, JSONType
import enum


class RoomStatus(str, enum.Enum):
    available = "available"
    occupied = "occupied"
    maintenance = "maintenance"
    cleaning = "cleaning"
    reserved = "reserved"


class RoomType(Base):
    __tablename__ = "room_types"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)  # "Deluxe King"
    description = Column(Text, nullable=True)
    base_rate = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    capacity = Column(Integer, nullable=False, default=2)
    amenities = Column(JSONType, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    room_type_id = Column(Integer, ForeignKey("room_types.id", ondelete="SET NULL"), nullable=True, index=True)

    number = Column(String(20), nullable=False)
    floor = Column(Integer, nullable=True)
    category = Column(String(50), nullable=True)  # standard, deluxe, suite
    capacity = Column(Integer, nullable=False, default=2)
    status = Column(String(20), nullable=False, default=RoomStatus.available.value, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)

    amenities = Column(JSONType, nullable=True)
    dynamic_pricing = Column(JSONType, nullable=True)
    maintenance_history = Column(JSONType, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    room_type = relationship("RoomType")
