"""Property owner schemas."""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr
from innkeep.models.property_owner import OwnerRole


class PropertyOwnerCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    full_name: str
    email: EmailStr
    phone: str | None = None
    role: OwnerRole = OwnerRole.owner


class PropertyOwnerUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    full_name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    role: OwnerRole | None = None


class PropertyOwnerResponse(BaseModel):
    id: int
    full_name: str
    email: str
    phone: str | None
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
