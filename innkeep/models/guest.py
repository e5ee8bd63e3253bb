"""Guests (customer records)."""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.sql import func
from innkeep.database import Base, JSONType


class Guest(Base):
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True, index=True)
    address = Column(String(500), nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    nationality = Column(String(100), nullable=True)
    id_type = Column(String(50), nullable=True)  # passport, national_id, ...
    id_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    tags = Column(JSONType, nullable=True)
    preferences = Column(JSONType, nullable=True)
    loyalty_info = Column(JSONType, nullable=True)

    vip = Column(Boolean, nullable=False, default=False)
    blacklisted = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
