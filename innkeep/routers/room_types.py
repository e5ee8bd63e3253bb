"""Room types CRUD."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.room import RoomTypeCreate, RoomTypeResponse, RoomTypeUpdate
from innkeep.services.room_types import RoomTypesService
from innkeep.utils.listing import paginated_list

router = APIRouter(prefix="/room-types", tags=["room-types"])


@router.get("")
def list_room_types(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return paginated_list(request, RoomTypesService(db), RoomTypeResponse)


@router.get("/by-property/{property_id}", response_model=list[RoomTypeResponse])
def room_types_by_property(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomTypesService(db).get_by_property_id(property_id)


@router.get("/{room_type_id}", response_model=RoomTypeResponse)
def get_room_type(room_type_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomTypesService(db).require(room_type_id)


@router.post("", response_model=RoomTypeResponse, status_code=201)
def create_room_type(data: RoomTypeCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomTypesService(db).create(data.model_dump(exclude_none=True))


@router.put("/{room_type_id}", response_model=RoomTypeResponse)
def update_room_type(
    room_type_id: int,
    data: RoomTypeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return RoomTypesService(db).update(room_type_id, data.model_dump(exclude_unset=True))


@router.delete("/{room_type_id}", status_code=204)
def delete_room_type(room_type_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    RoomTypesService(db).delete(room_type_id)
