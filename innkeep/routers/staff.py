"""Staff CRUD, schedule and activation."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.staff import StaffActiveUpdate, StaffCreate, StaffResponse, StaffSchedule, StaffUpdate
from innkeep.services.staff import StaffService
from innkeep.utils.listing import paginated_list

router = APIRouter(prefix="/staff", tags=["staff"])


@router.get("")
def list_staff(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return paginated_list(request, StaffService(db), StaffResponse)


@router.get("/by-email", response_model=StaffResponse)
def staff_by_email(email: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    member = StaffService(db).get_by_email(email)
    if not member:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return member


@router.get("/by-property/{property_id}", response_model=list[StaffResponse])
def staff_by_property(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return StaffService(db).get_by_property_id(property_id)


@router.get("/{staff_id}", response_model=StaffResponse)
def get_staff(staff_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return StaffService(db).require(staff_id)


@router.post("", response_model=StaffResponse, status_code=201)
def create_staff(data: StaffCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return StaffService(db).create(data.model_dump(exclude_none=True))


@router.put("/{staff_id}", response_model=StaffResponse)
def update_staff(staff_id: int, data: StaffUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return StaffService(db).update(staff_id, data.model_dump(exclude_unset=True))


@router.put("/{staff_id}/schedule", response_model=StaffResponse)
def update_staff_schedule(
    staff_id: int,
    data: StaffSchedule,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return StaffService(db).update_schedule(staff_id, data.schedule)


@router.patch("/{staff_id}/active", response_model=StaffResponse)
def set_staff_active(
    staff_id: int,
    data: StaffActiveUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return StaffService(db).set_active(staff_id, data.is_active)


@router.delete("/{staff_id}", status_code=204)
def delete_staff(staff_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    StaffService(db).delete(staff_id)
