"""Rooms CRUD, status, activation and availability."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.room import RoomActiveUpdate, RoomCreate, RoomResponse, RoomStatusUpdate, RoomUpdate
from innkeep.services.rooms import RoomsService
from innkeep.utils.listing import paginated_list

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("")
def list_rooms(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return paginated_list(request, RoomsService(db), RoomResponse)


@router.get("/available/{property_id}", response_model=list[RoomResponse])
def available_rooms(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomsService(db).get_available_rooms(property_id)


@router.get("/by-property/{property_id}", response_model=list[RoomResponse])
def rooms_by_property(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomsService(db).get_by_property_id(property_id)


@router.get("/by-room-type/{room_type_id}", response_model=list[RoomResponse])
def rooms_by_room_type(room_type_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomsService(db).get_by_room_type_id(room_type_id)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomsService(db).require(room_id)


@router.post("", response_model=RoomResponse, status_code=201)
def create_room(data: RoomCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomsService(db).create(data.model_dump(exclude_none=True))


@router.post("/bulk", response_model=list[RoomResponse], status_code=201)
def bulk_create_rooms(data: list[RoomCreate], db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomsService(db).bulk_create([r.model_dump(exclude_none=True) for r in data])


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(room_id: int, data: RoomUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return RoomsService(db).update(room_id, data.model_dump(exclude_unset=True))


@router.patch("/{room_id}/status", response_model=RoomResponse)
def update_room_status(
    room_id: int,
    data: RoomStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return RoomsService(db).update_status(room_id, data.status)


@router.patch("/{room_id}/active", response_model=RoomResponse)
def toggle_room_active(
    room_id: int,
    data: RoomActiveUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return RoomsService(db).toggle_active(room_id, data.is_active)


@router.delete("/{room_id}", status_code=204)
def delete_room(room_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    RoomsService(db).delete(room_id)
