"""Properties (hotels, resorts, guesthouses, ...)."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from innkeep.database import Base, JSONType
import enum


class PropertyType(str, enum.Enum):
    hotel = "hotel"
    resort = "resort"
    boutique = "boutique"
    motel = "motel"
    guesthouse = "guesthouse"
    hostel = "hostel"
    apartment = "apartment"
    villa = "villa"
    other = "other"


class PropertyStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    pending = "pending"
    maintenance = "maintenance"


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("property_owners.id", ondelete="SET NULL"), nullable=True, index=True)

    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, default=PropertyType.hotel.value)
    description = Column(Text, nullable=True)
    address = Column(String(500), nullable=False)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)
    star_rating = Column(Integer, nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)
    check_in_time = Column(String(10), nullable=True)  # "15:00"
    check_out_time = Column(String(10), nullable=True)  # "11:00"
    tax_info = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default=PropertyStatus.active.value, index=True)

    amenities = Column(JSONType, nullable=True)  # ["pool", "wifi", ...]
    contact_info = Column(JSONType, nullable=True)
    geo_coordinates = Column(JSONType, nullable=True)  # {"lat": .., "lng": ..}
    media_gallery = Column(JSONType, nullable=True)  # list of image URLs
    featured_image_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("PropertyOwner", back_populates="properties")
