"""Reservations: booking numbers, status changes, arrivals/departures and statistics."""
import random
from datetime import date, timedelta
from typing import Any

from innkeep.errors import NotFoundError, ServiceError, ValidationFailed
from innkeep.models.property import Property
from innkeep.models.reservation import PaymentStatus, Reservation, ReservationStatus
from innkeep.models.room import Room
from innkeep.services.base import BaseService

CONFIRMATION_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
_STATUSES = {s.value for s in ReservationStatus}
_PAYMENT_STATUSES = {s.value for s in PaymentStatus}
# Excluded from revenue and room nights
_LOST_STATUSES = (ReservationStatus.cancelled.value, ReservationStatus.no_show.value)
# No longer hold their room
_RELEASED_STATUSES = (*_LOST_STATUSES, ReservationStatus.checked_out.value)


def generate_booking_number(property_name: str | None, today: date | None = None) -> str:
    """<first 3 letters of the property name, or BKG><YYMMDD><4 random digits>."""
    prefix = (property_name or "")[:3].upper() or "BKG"
    today = today or date.today()
    return f"{prefix}{today.strftime('%y%m%d')}{random.randint(1000, 9999)}"


def generate_confirmation_code(length: int = 6) -> str:
    return "".join(random.choice(CONFIRMATION_ALPHABET) for _ in range(length))


class ReservationsService(BaseService[Reservation]):
    model = Reservation
    search_fields = ("booking_number", "confirmation_code", "special_requests")
    filter_fields = (
        "property_id", "room_id", "guest_id", "status", "payment_status", "source",
        "check_in_date", "check_out_date", "currency", "booking_number", "confirmation_code",
    )

    @staticmethod
    def _check_dates(check_in: date | None, check_out: date | None) -> None:
        if check_in and check_out and check_out <= check_in:
            raise ValidationFailed("check_out_date must be after check_in_date")

    def create(self, data: dict[str, Any]) -> Reservation:
        data = {**data}
        self._check_dates(data.get("check_in_date"), data.get("check_out_date"))
        prop = self.db.get(Property, data["property_id"]) if data.get("property_id") else None
        data.setdefault("booking_number", generate_booking_number(prop.name if prop else None))
        data.setdefault("confirmation_code", generate_confirmation_code())
        for key, default in (
            ("status", ReservationStatus.pending.value),
            ("payment_status", PaymentStatus.pending.value),
            ("source", "direct"),
            ("children", 0),
        ):
            if data.get(key) is None:
                data[key] = default
        return super().create(data)

    def update(self, id: int, data: dict[str, Any]) -> Reservation:
        """Date changes are checked against the stored stay."""
        if "check_in_date" in data or "check_out_date" in data:
            current = self.require(id)
            self._check_dates(
                data.get("check_in_date", current.check_in_date),
                data.get("check_out_date", current.check_out_date),
            )
        return super().update(id, data)

    def get_by_confirmation_code(self, code: str) -> Reservation | None:
        try:
            return self._query().filter(Reservation.confirmation_code == code).first()
        except Exception as e:
            self._handle_error(e)

    def update_status(self, id: int, status: str) -> Reservation:
        status = getattr(status, "value", status)
        if status not in _STATUSES:
            raise ValidationFailed(f"Invalid reservation status: {status}")
        return self.update(id, {"status": status})

    def update_payment_status(self, id: int, payment_status: str) -> Reservation:
        payment_status = getattr(payment_status, "value", payment_status)
        if payment_status not in _PAYMENT_STATUSES:
            raise ValidationFailed(f"Invalid payment status: {payment_status}")
        return self.update(id, {"payment_status": payment_status})

    def assign_room(self, id: int, room_id: int) -> Reservation:
        """Put the stay in room_id: an active room of the same property, free for those dates."""
        reservation = self.require(id)
        room = self.db.get(Room, room_id)
        if room is None:
            raise NotFoundError(f"rooms {room_id} not found")
        if room.property_id != reservation.property_id or not room.is_active:
            raise ValidationFailed(f"Room {room.number} is not an active room of this property")
        try:
            clash = (
                self._query()
                .filter(
                    Reservation.room_id == room_id,
                    Reservation.id != id,
                    Reservation.status.notin_(_RELEASED_STATUSES),
                    Reservation.check_in_date < reservation.check_out_date,
                    Reservation.check_out_date > reservation.check_in_date,
                )
                .first()
            )
        except Exception as e:
            self._handle_error(e)
        if clash is not None:
            raise ServiceError(f"Room {room.number} is already booked ({clash.booking_number})", "CONFLICT")
        return self.update(id, {"room_id": room_id})

    def _by(self, *criteria, order=None) -> list[Reservation]:
        try:
            return self._query().filter(*criteria).order_by(*(order or (Reservation.check_in_date.desc(),))).all()
        except Exception as e:
            self._handle_error(e)

    def get_by_guest_id(self, guest_id: int) -> list[Reservation]:
        return self._by(Reservation.guest_id == guest_id)

    def get_by_property_id(self, property_id: int) -> list[Reservation]:
        return self._by(Reservation.property_id == property_id)

    def get_today_arrivals(self, property_id: int, today: date | None = None) -> list[Reservation]:
        today = today or date.today()
        return self._by(
            Reservation.property_id == property_id,
            Reservation.check_in_date == today,
            Reservation.status.in_([ReservationStatus.confirmed.value, ReservationStatus.booked.value]),
            order=(Reservation.id,),
        )

    def get_today_departures(self, property_id: int, today: date | None = None) -> list[Reservation]:
        today = today or date.today()
        return self._by(
            Reservation.property_id == property_id,
            Reservation.check_out_date == today,
            Reservation.status == ReservationStatus.checked_in.value,
            order=(Reservation.id,),
        )

    def get_property_statistics(self, property_id: int, start: date, end: date) -> dict[str, Any]:
        """Counts and rates for reservations overlapping [start, end] (both inclusive)."""
        window_end = end + timedelta(days=1)
        rows = self._by(
            Reservation.property_id == property_id,
            Reservation.check_in_date < window_end,
            Reservation.check_out_date > start,
            order=(Reservation.id,),
        )
        try:
            active_rooms = (
                self.db.query(Room)
                .filter(Room.property_id == property_id, Room.is_active.is_(True))
                .count()
            )
        except Exception as e:
            self._handle_error(e)

        revenue = 0.0
        room_nights = 0
        for r in rows:
            if r.status in _LOST_STATUSES:
                continue
            revenue += float(r.total_amount or 0)
            room_nights += max(0, (min(r.check_out_date, window_end) - max(r.check_in_date, start)).days)

        capacity = active_rooms * max(0, (window_end - start).days)
        return {
            "totalReservations": len(rows),
            "confirmedReservations": sum(1 for r in rows if r.status == ReservationStatus.confirmed.value),
            "cancelledReservations": sum(1 for r in rows if r.status == ReservationStatus.cancelled.value),
            "noShowReservations": sum(1 for r in rows if r.status == ReservationStatus.no_show.value),
            "totalRevenue": round(revenue, 2),
            "averageDailyRate": round(revenue / room_nights, 2) if room_nights else 0,
            "occupancyRate": round(room_nights / capacity * 100, 2) if capacity else 0,
        }

    def build_confirmation_payload(self, reservation: Reservation) -> dict[str, Any]:
        """camelCase payload for send_booking_confirmation."""
        guest = reservation.guest
        room = reservation.room
        room_type = None
        if room is not None:
            room_type = room.room_type.name if room.room_type is not None else room.category
        return {
            "bookingId": str(reservation.id),
            "guestEmail": guest.email if guest else None,
            "guestName": guest.full_name if guest else None,
            "propertyName": reservation.property.name if reservation.property else None,
            "checkInDate": reservation.check_in_date.isoformat(),
            "checkOutDate": reservation.check_out_date.isoformat(),
            "roomType": room_type,
            "totalAmount": float(reservation.total_amount or 0),
            "currency": reservation.currency,
            "confirmationCode": reservation.confirmation_code,
        }
