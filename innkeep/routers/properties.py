"""Properties CRUD, status and image gallery."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.property import (
    PropertyCreate,
    PropertyImage,
    PropertyResponse,
    PropertyStatusUpdate,
    PropertyUpdate,
)
from innkeep.services.properties import PropertiesService
from innkeep.utils.listing import paginated_list

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("")
def list_properties(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Filters: any property column (with _eq/_ilike/... suffixes), star_rating_min, star_rating_max."""
    return paginated_list(request, PropertiesService(db), PropertyResponse, ("star_rating_min", "star_rating_max"))


@router.get("/by-owner/{owner_id}", response_model=list[PropertyResponse])
def properties_by_owner(owner_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PropertiesService(db).get_by_owner_id(owner_id)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PropertiesService(db).require(property_id)


@router.post("", response_model=PropertyResponse, status_code=201)
def create_property(data: PropertyCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return PropertiesService(db).create(data.model_dump(exclude_none=True))


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    data: PropertyUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PropertiesService(db).update(property_id, data.model_dump(exclude_unset=True))


@router.patch("/{property_id}/status", response_model=PropertyResponse)
def update_property_status(
    property_id: int,
    data: PropertyStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PropertiesService(db).update_status(property_id, data.status)


@router.post("/{property_id}/images", response_model=PropertyResponse)
def add_property_image(
    property_id: int,
    data: PropertyImage,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PropertiesService(db).add_image(property_id, data.image_url, data.is_featured)


@router.delete("/{property_id}/images", response_model=PropertyResponse)
def remove_property_image(
    property_id: int,
    image_url: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return PropertiesService(db).remove_image(property_id, image_url)


@router.delete("/{property_id}", status_code=204)
def delete_property(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    PropertiesService(db).delete(property_id)
