"""Housekeeping requests: CRUD, assignment, status, overdue list and statistics."""
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.housekeeping import HousekeepingStatus
from innkeep.models.user import User
from innkeep.schemas.housekeeping import (
    HousekeepingAssign,
    HousekeepingCreate,
    HousekeepingRecurring,
    HousekeepingResponse,
    HousekeepingStatusUpdate,
    HousekeepingUpdate,
)
from innkeep.services.housekeeping import HousekeepingService
from innkeep.utils.listing import paginated_list

router = APIRouter(prefix="/housekeeping", tags=["housekeeping"])


@router.get("")
def list_requests(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return paginated_list(request, HousekeepingService(db), HousekeepingResponse)


@router.get("/overdue/{property_id}", response_model=list[HousekeepingResponse])
def overdue_requests(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return HousekeepingService(db).get_overdue_requests(property_id)


@router.get("/by-staff/{staff_id}", response_model=list[HousekeepingResponse])
def requests_for_staff(
    staff_id: int,
    status: HousekeepingStatus | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return HousekeepingService(db).get_requests_for_staff(staff_id, status)


@router.get("/by-room/{room_id}", response_model=list[HousekeepingResponse])
def requests_for_room(
    room_id: int,
    limit: int = 10,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return HousekeepingService(db).get_requests_for_room(room_id, limit=limit)


@router.get("/statistics/{property_id}")
def housekeeping_statistics(
    property_id: int,
    start: date,
    end: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    return HousekeepingService(db).get_property_statistics(property_id, start, end)


@router.get("/{request_id}", response_model=HousekeepingResponse)
def get_request(request_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return HousekeepingService(db).require(request_id)


@router.post("", response_model=HousekeepingResponse, status_code=201)
def create_request(data: HousekeepingCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return HousekeepingService(db).create(data.model_dump(exclude_none=True))


@router.put("/{request_id}", response_model=HousekeepingResponse)
def update_request(
    request_id: int,
    data: HousekeepingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return HousekeepingService(db).update(request_id, data.model_dump(exclude_unset=True))


@router.post("/recurring")
def create_recurring_tasks(
    data: HousekeepingRecurring,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    created = HousekeepingService(db).create_recurring_tasks(data.property_id, data.pattern, data.room_ids)
    return {"created": created}


@router.patch("/{request_id}/status", response_model=HousekeepingResponse)
def update_request_status(
    request_id: int,
    data: HousekeepingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return HousekeepingService(db).update_status(request_id, data.status, data.notes)


@router.patch("/{request_id}/assign", response_model=HousekeepingResponse)
def assign_request(
    request_id: int,
    data: HousekeepingAssign,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return HousekeepingService(db).assign_to_staff(request_id, data.staff_id)


@router.delete("/{request_id}", status_code=204)
def delete_request(request_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    HousekeepingService(db).delete(request_id)
