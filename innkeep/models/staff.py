"""Staff members."""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime
from sqlalchemy.sql import func
from innkeep.database import Base, JSONType


class Staff(Base):
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="SET NULL"), nullable=True, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    phone_number = Column(String(50), nullable=True)
    role = Column(String(50), nullable=False)  # housekeeper, front_desk, manager, ...
    is_active = Column(Boolean, nullable=False, default=True)

    schedule = Column(JSONType, nullable=True)
    employment_details = Column(JSONType, nullable=True)
    access_permissions = Column(JSONType, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
