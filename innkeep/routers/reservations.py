"""Reservations CRUD, status changes, arrivals/departures, statistics and confirmation email."""
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.reservation import (
    PaymentStatusUpdate,
    ReservationCreate,
    ReservationResponse,
    ReservationRoomAssign,
    ReservationStatistics,
    ReservationStatusUpdate,
    ReservationUpdate,
)
from innkeep.services.booking_confirmation import BookingConfirmationError, send_booking_confirmation
from innkeep.services.reservations import ReservationsService
from innkeep.utils.listing import paginated_list

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("")
def list_reservations(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return paginated_list(request, ReservationsService(db), ReservationResponse)


@router.get("/by-code/{code}", response_model=ReservationResponse)
def reservation_by_code(code: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    reservation = ReservationsService(db).get_by_confirmation_code(code.strip().upper())
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return reservation


@router.get("/by-guest/{guest_id}", response_model=list[ReservationResponse])
def reservations_by_guest(guest_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ReservationsService(db).get_by_guest_id(guest_id)


@router.get("/by-property/{property_id}", response_model=list[ReservationResponse])
def reservations_by_property(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ReservationsService(db).get_by_property_id(property_id)


@router.get("/arrivals/{property_id}", response_model=list[ReservationResponse])
def today_arrivals(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ReservationsService(db).get_today_arrivals(property_id)


@router.get("/departures/{property_id}", response_model=list[ReservationResponse])
def today_departures(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ReservationsService(db).get_today_departures(property_id)


@router.get("/statistics/{property_id}", response_model=ReservationStatistics)
def reservation_statistics(
    property_id: int,
    start: date,
    end: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    return ReservationsService(db).get_property_statistics(property_id, start, end)


@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(reservation_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ReservationsService(db).require(reservation_id)


@router.post("", response_model=ReservationResponse, status_code=201)
def create_reservation(data: ReservationCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ReservationsService(db).create(data.model_dump(exclude_none=True))


@router.put("/{reservation_id}", response_model=ReservationResponse)
def update_reservation(
    reservation_id: int,
    data: ReservationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ReservationsService(db).update(reservation_id, data.model_dump(exclude_unset=True))


@router.patch("/{reservation_id}/status", response_model=ReservationResponse)
def update_reservation_status(
    reservation_id: int,
    data: ReservationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ReservationsService(db).update_status(reservation_id, data.status)


@router.patch("/{reservation_id}/payment-status", response_model=ReservationResponse)
def update_reservation_payment_status(
    reservation_id: int,
    data: PaymentStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ReservationsService(db).update_payment_status(reservation_id, data.payment_status)


@router.patch("/{reservation_id}/room", response_model=ReservationResponse)
def assign_reservation_room(
    reservation_id: int,
    data: ReservationRoomAssign,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ReservationsService(db).assign_room(reservation_id, data.room_id)


@router.post("/{reservation_id}/send-confirmation")
def send_reservation_confirmation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = ReservationsService(db)
    payload = service.build_confirmation_payload(service.require(reservation_id))
    try:
        return send_booking_confirmation(payload)
    except BookingConfirmationError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})


@router.delete("/{reservation_id}", status_code=204)
def delete_reservation(reservation_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    ReservationsService(db).delete(reservation_id)
