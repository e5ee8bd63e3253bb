"""Guests CRUD, lookup, VIP / blacklist and tags."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.guest import (
    GuestBlacklistUpdate,
    GuestCreate,
    GuestResponse,
    GuestTags,
    GuestUpdate,
    GuestVipUpdate,
)
from innkeep.services.guests import GuestsService
from innkeep.utils.listing import paginated_list

router = APIRouter(prefix="/guests", tags=["guests"])


@router.get("")
def list_guests(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return paginated_list(request, GuestsService(db), GuestResponse)


@router.get("/search", response_model=list[GuestResponse])
def search_guests(q: str, limit: int = 10, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return GuestsService(db).search(q, limit=limit)


@router.get("/by-email", response_model=GuestResponse)
def guest_by_email(email: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    guest = GuestsService(db).get_by_email(email)
    if not guest:
        raise HTTPException(status_code=404, detail="Guest not found")
    return guest


@router.get("/by-phone", response_model=GuestResponse)
def guest_by_phone(phone: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    guest = GuestsService(db).get_by_phone(phone)
    if not guest:
        raise HTTPException(status_code=404, detail="Guest not found")
    return guest


@router.get("/{guest_id}", response_model=GuestResponse)
def get_guest(guest_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return GuestsService(db).require(guest_id)


@router.post("", response_model=GuestResponse, status_code=201)
def create_guest(data: GuestCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return GuestsService(db).create(data.model_dump(exclude_none=True))


@router.put("/{guest_id}", response_model=GuestResponse)
def update_guest(guest_id: int, data: GuestUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return GuestsService(db).update(guest_id, data.model_dump(exclude_unset=True))


@router.patch("/{guest_id}/vip", response_model=GuestResponse)
def set_guest_vip(guest_id: int, data: GuestVipUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return GuestsService(db).set_vip_status(guest_id, data.vip)


@router.patch("/{guest_id}/blacklist", response_model=GuestResponse)
def set_guest_blacklisted(
    guest_id: int,
    data: GuestBlacklistUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return GuestsService(db).set_blacklisted_status(guest_id, data.blacklisted, data.reason)


@router.post("/{guest_id}/tags", response_model=GuestResponse)
def add_guest_tags(guest_id: int, data: GuestTags, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return GuestsService(db).add_tags(guest_id, data.tags)


@router.post("/{guest_id}/tags/remove", response_model=GuestResponse)
def remove_guest_tags(guest_id: int, data: GuestTags, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return GuestsService(db).remove_tags(guest_id, data.tags)


@router.delete("/{guest_id}", status_code=204)
def delete_guest(guest_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    GuestsService(db).delete(guest_id)
