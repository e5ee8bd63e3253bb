"""Invoices (billings) and their line items."""
from sqlalchemy import Column, Integer, String, Text, Date, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from innkeep.database import Base
import enum


class BillingStatus(str, enum.Enum):
    draft = "draft"
    pending = "pending"
    paid = "paid"
    partially_paid = "partially_paid"
    overdue = "overdue"
    cancelled = "cancelled"
    refunded = "refunded"


class Billing(Base):
    __tablename__ = "billings"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    reservation_id = Column(Integer, ForeignKey("reservations.id", ondelete="SET NULL"), nullable=True, index=True)
    guest_id = Column(Integer, ForeignKey("guests.id", ondelete="SET NULL"), nullable=True, index=True)

    invoice_number = Column(String(32), unique=True, nullable=False, index=True)
    billing_date = Column(Date, nullable=False, index=True)
    due_date = Column(Date, nullable=False, index=True)

    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="USD")
    tax_amount = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    tax_rate = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)  # percent
    category = Column(String(50), nullable=True)  # room, food, spa, other
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=BillingStatus.draft.value, index=True)

    payment_method = Column(String(50), nullable=True)
    payment_reference = Column(String(100), nullable=True)
    payment_date = Column(DateTime(timezone=True), nullable=True)
    amount_paid = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    property = relationship("Property")
    items = relationship(
        "BillingItem",
        back_populates="billing",
        cascade="all, delete-orphan",
        order_by="BillingItem.id",
    )


class BillingItem(Base):
    __tablename__ = "billing_items"

    id = Column(Integer, primary_key=True, index=True)
    billing_id = Column(Integer, ForeignKey("billings.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    tax_rate = Column(Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    tax_amount = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    discount_amount = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    category = Column(String(50), nullable=True)
    service_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    billing = relationship("Billing", back_populates="items")
