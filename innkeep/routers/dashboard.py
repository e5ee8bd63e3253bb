"""Front-desk dashboard summary for one property."""
from datetime import date, timedelta
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.room import Room
from innkeep.models.user import User
from innkeep.schemas.reservation import ReservationResponse
from innkeep.services.housekeeping import HousekeepingService
from innkeep.services.properties import PropertiesService
from innkeep.services.reservations import ReservationsService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _month_bounds(today: date) -> tuple[date, date]:
    start = today.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


@router.get("/summary")
def summary(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Room counts by status, today's arrivals/departures, housekeeping load and month-to-date reservation stats."""
    PropertiesService(db).require(property_id)
    today = date.today()
    rooms_by_status = dict(
        db.query(Room.status, func.count(Room.id))
        .filter(Room.property_id == property_id, Room.is_active.is_(True))
        .group_by(Room.status)
        .all()
    )
    reservations = ReservationsService(db)
    housekeeping = HousekeepingService(db)
    start, end = _month_bounds(today)
    return {
        "propertyId": property_id,
        "date": today.isoformat(),
        "roomsByStatus": rooms_by_status,
        "totalRooms": sum(rooms_by_status.values()),
        "arrivals": [
            ReservationResponse.model_validate(r).model_dump(mode="json")
            for r in reservations.get_today_arrivals(property_id, today)
        ],
        "departures": [
            ReservationResponse.model_validate(r).model_dump(mode="json")
            for r in reservations.get_today_departures(property_id, today)
        ],
        "housekeeping": {
            "open": housekeeping.count_open(property_id),
            "overdue": len(housekeeping.get_overdue_requests(property_id)),
        },
        "reservationStatistics": reservations.get_property_statistics(property_id, start, end),
    }
