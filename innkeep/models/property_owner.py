"""Property owners (accounts that own or manage properties)."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from innkeep.database import Base
import enum


class OwnerRole(str, enum.Enum):
    owner = "owner"
    manager = "manager"
    admin = "admin"


class PropertyOwner(Base):
    __tablename__ = "property_owners"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=True)
    role = Column(String(20), nullable=False, default=OwnerRole.owner.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    properties = relationship("Property", back_populates="owner")
