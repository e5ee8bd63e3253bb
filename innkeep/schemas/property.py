"""Property schemas."""
from datetime import datetime
from typing import Any
from pydantic import BaseModel, ConfigDict, Field
from innkeep.models.property import PropertyType, PropertyStatus


class PropertyCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    name: str
    type: PropertyType = PropertyType.hotel
    description: str | None = None
    address: str
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None
    star_rating: int | None = Field(default=None, ge=1, le=5)
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    check_in_time: str | None = None
    check_out_time: str | None = None
    tax_info: str | None = None
    status: PropertyStatus | None = None
    owner_id: int | None = None
    amenities: list[str] | None = None
    contact_info: dict[str, Any] | None = None
    geo_coordinates: dict[str, Any] | None = None
    media_gallery: list[str] | None = None
    featured_image_url: str | None = None


class PropertyUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    name: str | None = None
    type: PropertyType | None = None
    description: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None
    star_rating: int | None = Field(default=None, ge=1, le=5)
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    check_in_time: str | None = None
    check_out_time: str | None = None
    tax_info: str | None = None
    owner_id: int | None = None
    amenities: list[str] | None = None
    contact_info: dict[str, Any] | None = None
    geo_coordinates: dict[str, Any] | None = None


class PropertyStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    status: PropertyStatus


class PropertyImage(BaseModel):
    image_url: str
    is_featured: bool = False


class PropertyResponse(BaseModel):
    id: int
    owner_id: int | None
    name: str
    type: str
    description: str | None
    address: str
    city: str | None
    state: str | None
    country: str | None
    zip_code: str | None
    star_rating: int | None
    phone: str | None
    email: str | None
    website: str | None
    check_in_time: str | None
    check_out_time: str | None
    tax_info: str | None
    status: str
    amenities: list[str] | None
    contact_info: dict[str, Any] | None
    geo_coordinates: dict[str, Any] | None
    media_gallery: list[str] | None
    featured_image_url: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
