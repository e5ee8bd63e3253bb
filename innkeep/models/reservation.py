"""Reservations (bookings)."""
from sqlalchemy import Column, Integer, String, Text, Date, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from innkeep.database import Base
import enum


class ReservationStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    booked = "booked"
    checked_in = "checked_in"
    checked_out = "checked_out"
    cancelled = "cancelled"
    no_show = "no_show"


class PaymentStatus(str, enum.Enum):
    pending = "pending"
    authorized = "authorized"
    paid = "paid"
    partially_paid = "partially_paid"
    refunded = "refunded"
    failed = "failed"


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id", ondelete="SET NULL"), nullable=True, index=True)

    booking_number = Column(String(32), nullable=False, index=True)
    confirmation_code = Column(String(16), unique=True, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ReservationStatus.pending.value, index=True)

    check_in_date = Column(Date, nullable=False, index=True)
    check_out_date = Column(Date, nullable=False, index=True)
    adults = Column(Integer, nullable=False, default=1)
    children = Column(Integer, nullable=False, default=0)
    special_requests = Column(Text, nullable=True)

    total_amount = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="USD")
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.pending.value)
    source = Column(String(50), nullable=False, default="direct")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    property = relationship("Property")
    room = relationship("Room")
    guest = relationship("Guest")
