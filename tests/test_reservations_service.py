import re
from datetime import date, timedelta

import pytest

from innkeep.errors import ServiceError, ValidationFailed
from innkeep.services.guests import GuestsService
from innkeep.services.reservations import (
    CONFIRMATION_ALPHABET,
    ReservationsService,
    generate_booking_number,
    generate_confirmation_code,
)
from innkeep.services.properties import PropertiesService
from innkeep.services.room_types import RoomTypesService
from innkeep.services.rooms import RoomsService


def _book(db, hotel, check_in, check_out, **extra):
    return ReservationsService(db).create(
        {"property_id": hotel.id, "check_in_date": check_in, "check_out_date": check_out, **extra}
    )


def test_booking_number_format():
    assert re.fullmatch(r"GRA261017\d{4}", generate_booking_number("grand plaza", date(2026, 10, 17)))
    assert generate_booking_number("", date(2026, 1, 2)).startswith("BKG260102")
    assert generate_booking_number(None, date(2026, 1, 2)).startswith("BKG")


def test_confirmation_code_alphabet():
    code = generate_confirmation_code()
    assert len(code) == 6
    assert set(code) <= set(CONFIRMATION_ALPHABET)


def test_create_applies_defaults(db, hotel):
    today = date.today()
    reservation = _book(db, hotel, today, today + timedelta(days=2), total_amount=300)
    assert reservation.booking_number.startswith("GRA" + today.strftime("%y%m%d"))
    assert reservation.status == "pending"
    assert reservation.payment_status == "pending"
    assert reservation.source == "direct"
    assert reservation.children == 0
    assert ReservationsService(db).get_by_confirmation_code(reservation.confirmation_code).id == reservation.id


def test_create_rejects_inverted_dates(db, hotel):
    today = date.today()
    with pytest.raises(ValidationFailed):
        _book(db, hotel, today, today)


def test_status_validation(db, hotel):
    service = ReservationsService(db)
    reservation = _book(db, hotel, date(2026, 10, 1), date(2026, 10, 3))
    assert service.update_status(reservation.id, "confirmed").status == "confirmed"
    assert service.update_payment_status(reservation.id, "paid").payment_status == "paid"
    with pytest.raises(ValidationFailed):
        service.update_status(reservation.id, "lost")
    with pytest.raises(ValidationFailed):
        service.update_payment_status(reservation.id, "maybe")


def test_arrivals_and_departures(db, hotel):
    today = date(2026, 10, 17)
    service = ReservationsService(db)
    arriving = _book(db, hotel, today, today + timedelta(days=1), status="confirmed")
    _book(db, hotel, today, today + timedelta(days=1), status="cancelled")
    leaving = _book(db, hotel, today - timedelta(days=2), today, status="checked_in")
    _book(db, hotel, today - timedelta(days=2), today, status="checked_out")

    assert [r.id for r in service.get_today_arrivals(hotel.id, today)] == [arriving.id]
    assert [r.id for r in service.get_today_departures(hotel.id, today)] == [leaving.id]


def test_property_statistics(db, hotel, rooms):
    _book(db, hotel, date(2026, 10, 2), date(2026, 10, 5), status="confirmed", total_amount=300)
    _book(db, hotel, date(2026, 10, 3), date(2026, 10, 4), status="cancelled", total_amount=100)
    _book(db, hotel, date(2026, 9, 30), date(2026, 10, 2), status="checked_in", total_amount=200)
    _book(db, hotel, date(2026, 11, 1), date(2026, 11, 2), status="confirmed", total_amount=999)

    stats = ReservationsService(db).get_property_statistics(hotel.id, date(2026, 10, 1), date(2026, 10, 10))
    assert stats == {
        "totalReservations": 3,
        "confirmedReservations": 1,
        "cancelledReservations": 1,
        "noShowReservations": 0,
        "totalRevenue": 500.0,
        "averageDailyRate": 125.0,
        "occupancyRate": 20.0,
    }


def test_statistics_without_rooms_or_bookings(db, hotel):
    stats = ReservationsService(db).get_property_statistics(hotel.id, date(2026, 10, 1), date(2026, 10, 31))
    assert stats["totalReservations"] == 0
    assert stats["averageDailyRate"] == 0
    assert stats["occupancyRate"] == 0


def test_confirmation_payload(db, hotel, rooms):
    deluxe = RoomTypesService(db).create({"property_id": hotel.id, "name": "Deluxe"})
    rooms[0].room_type_id = deluxe.id
    db.commit()
    guest = GuestsService(db).create({"first_name": "Rui", "last_name": "Lopes", "email": "rui@example.com"})
    reservation = _book(
        db, hotel, date(2026, 10, 20), date(2026, 10, 22),
        guest_id=guest.id, room_id=rooms[0].id, total_amount=410.5, currency="EUR",
    )

    payload = ReservationsService(db).build_confirmation_payload(reservation)
    assert payload == {
        "bookingId": str(reservation.id),
        "guestEmail": "rui@example.com",
        "guestName": "Rui Lopes",
        "propertyName": "Grand Plaza",
        "checkInDate": "2026-10-20",
        "checkOutDate": "2026-10-22",
        "roomType": "Deluxe",
        "totalAmount": 410.5,
        "currency": "EUR",
        "confirmationCode": reservation.confirmation_code,
    }



def test_update_rejects_inverted_dates(db, hotel):
    service = ReservationsService(db)
    reservation = _book(db, hotel, date(2026, 10, 10), date(2026, 10, 12))

    with pytest.raises(ValidationFailed):
        service.update(reservation.id, {"check_out_date": date(2026, 10, 1)})
    with pytest.raises(ValidationFailed):
        service.update(reservation.id, {"check_in_date": date(2026, 10, 12)})

    db.refresh(reservation)
    assert (reservation.check_in_date, reservation.check_out_date) == (date(2026, 10, 10), date(2026, 10, 12))

    moved = service.update(reservation.id, {"check_in_date": date(2026, 10, 11), "check_out_date": date(2026, 10, 15)})
    assert moved.check_out_date == date(2026, 10, 15)
    assert service.update(reservation.id, {"special_requests": "Late arrival"}).special_requests == "Late arrival"


def test_assign_room(db, hotel, rooms):
    service = ReservationsService(db)
    first = _book(db, hotel, date(2026, 10, 10), date(2026, 10, 12), status="confirmed")
    second = _book(db, hotel, date(2026, 10, 11), date(2026, 10, 13), status="confirmed")
    later = _book(db, hotel, date(2026, 10, 12), date(2026, 10, 14), status="confirmed")

    assert service.assign_room(first.id, rooms[0].id).room_id == rooms[0].id

    with pytest.raises(ServiceError) as exc:
        service.assign_room(second.id, rooms[0].id)
    assert exc.value.code == "CONFLICT"

    # check-out day is free for the next arrival
    assert service.assign_room(later.id, rooms[0].id).room_id == rooms[0].id

    service.update_status(first.id, "cancelled")
    service.update_status(later.id, "checked_out")
    assert service.assign_room(second.id, rooms[0].id).room_id == rooms[0].id


def test_assign_room_must_belong_to_property(db, hotel, rooms):
    other = PropertiesService(db).create({"name": "Sea View", "address": "2 Beach Rd"})
    elsewhere = RoomsService(db).create({"property_id": other.id, "number": "201"})
    reservation = _book(db, hotel, date(2026, 10, 10), date(2026, 10, 12))

    with pytest.raises(ValidationFailed):
        ReservationsService(db).assign_room(reservation.id, elsewhere.id)

    RoomsService(db).toggle_active(rooms[0].id, False)
    with pytest.raises(ValidationFailed):
        ReservationsService(db).assign_room(reservation.id, rooms[0].id)
