from datetime import date, timedelta
from unittest.mock import patch


def test_health_is_public(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "ok"


def test_login_and_me(client, admin_user):
    r = client.post("/auth/login", json={"username": "admin", "password": "secret-pass"})
    assert r.status_code == 200
    token = r.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "admin"
    assert "password" not in me.json()


def test_login_rejects_bad_password(client, admin_user):
    r = client.post("/auth/login", json={"username": "admin", "password": "nope"})
    assert r.status_code == 401


def test_routes_require_token(client):
    assert client.get("/properties").status_code == 401
    assert client.get("/rooms", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_property_crud_and_listing(client, auth_headers):
    for name, city, stars in [("Casa Azul", "Porto", 3), ("Grand Plaza", "Lisbon", 5), ("Sea View", "Lisbon", 4)]:
        r = client.post("/properties", json={"name": name, "address": "x", "city": city, "star_rating": stars}, headers=auth_headers)
        assert r.status_code == 201
        assert r.json()["status"] == "active"

    r = client.get("/properties?city=Lisbon&sort=-star_rating&limit=1", headers=auth_headers)
    body = r.json()
    assert [p["name"] for p in body["data"]] == ["Grand Plaza"]
    assert body["pagination"]["totalItems"] == 2
    assert body["pagination"]["hasNextPage"] is True
    assert body["links"]["next"] == "/properties?page=2&limit=1&city=Lisbon&sort=-star_rating"

    r = client.get("/properties?star_rating_min=4&search=view", headers=auth_headers)
    assert [p["name"] for p in r.json()["data"]] == ["Sea View"]

    prop_id = body["data"][0]["id"]
    r = client.put(f"/properties/{prop_id}", json={"phone": "+351 210 000 000"}, headers=auth_headers)
    assert r.json()["phone"] == "+351 210 000 000"
    r = client.patch(f"/properties/{prop_id}/status", json={"status": "inactive"}, headers=auth_headers)
    assert r.json()["status"] == "inactive"

    assert client.delete(f"/properties/{prop_id}", headers=auth_headers).status_code == 204
    r = client.get(f"/properties/{prop_id}", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"


def test_unknown_sort_field_is_400(client, auth_headers):
    r = client.get("/rooms?sort=colour", headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_FILTER"


def test_owner_envelope(client, auth_headers):
    r = client.post("/owners", json={"full_name": "Maria Costa", "email": "maria@example.com"}, headers=auth_headers)
    assert r.status_code == 201
    assert r.json()["success"] is True
    owner_id = r.json()["data"]["id"]

    dup = client.post("/owners", json={"full_name": "Other", "email": "maria@example.com"}, headers=auth_headers)
    assert dup.status_code == 400
    assert dup.json()["success"] is False

    missing = client.get("/owners/9999", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json()["success"] is False

    search = client.get("/owners/search?search=maria", headers=auth_headers)
    assert [o["id"] for o in search.json()["data"]] == [owner_id]

    assert client.delete(f"/owners/{owner_id}", headers=auth_headers).json() == {"success": True}


def test_user_writes_need_admin(client, staff_headers, auth_headers):
    payload = {"username": "newbie", "password": "pw12345"}
    assert client.post("/users", json=payload, headers=staff_headers).status_code == 403
    r = client.post("/users", json=payload, headers=auth_headers)
    assert r.status_code == 201
    assert r.json()["role"] == "user"
    assert client.post("/users", json=payload, headers=auth_headers).status_code == 409


def test_reservation_flow(client, auth_headers, hotel, rooms):
    today = date.today()
    guest = client.post(
        "/guests", json={"first_name": "Rui", "last_name": "Lopes", "email": "rui@example.com"}, headers=auth_headers
    ).json()
    r = client.post(
        "/reservations",
        json={
            "property_id": hotel.id,
            "guest_id": guest["id"],
            "room_id": rooms[0].id,
            "check_in_date": today.isoformat(),
            "check_out_date": (today + timedelta(days=2)).isoformat(),
            "total_amount": 240,
            "status": "confirmed",
        },
        headers=auth_headers,
    )
    assert r.status_code == 201
    reservation = r.json()
    assert reservation["booking_number"].startswith("GRA")

    arrivals = client.get(f"/reservations/arrivals/{hotel.id}", headers=auth_headers).json()
    assert [a["id"] for a in arrivals] == [reservation["id"]]

    code = reservation["confirmation_code"].lower()
    assert client.get(f"/reservations/by-code/{code}", headers=auth_headers).json()["id"] == reservation["id"]

    with patch("innkeep.services.booking_confirmation.send_email", return_value="msg-9") as send:
        r = client.post(f"/reservations/{reservation['id']}/send-confirmation", headers=auth_headers)
    assert r.json() == {"success": True, "messageId": "msg-9", "bookingId": str(reservation["id"])}
    assert send.call_args[0][0] == "rui@example.com"

    summary = client.get(f"/dashboard/summary?property_id={hotel.id}", headers=auth_headers).json()
    assert summary["totalRooms"] == 2
    assert summary["roomsByStatus"] == {"available": 2}
    assert len(summary["arrivals"]) == 1
    assert summary["reservationStatistics"]["totalReservations"] == 1


def test_reservation_rejects_inverted_dates(client, auth_headers, hotel):
    r = client.post(
        "/reservations",
        json={"property_id": hotel.id, "check_in_date": "2026-10-20", "check_out_date": "2026-10-19"},
        headers=auth_headers,
    )
    assert r.status_code == 422


def test_housekeeping_routes(client, auth_headers, rooms, housekeeper):
    r = client.post(
        "/housekeeping",
        json={"property_id": rooms[0].property_id, "room_id": rooms[0].id, "priority": "high"},
        headers=auth_headers,
    )
    assert r.status_code == 201
    req_id = r.json()["id"]

    r = client.patch(f"/housekeeping/{req_id}/assign", json={"staff_id": housekeeper.id}, headers=auth_headers)
    assert r.json()["assigned_to"] == housekeeper.id
    r = client.patch(f"/housekeeping/{req_id}/status", json={"status": "completed"}, headers=auth_headers)
    assert r.json()["completed_at"] is not None

    listing = client.get("/housekeeping?status=completed", headers=auth_headers).json()
    assert [h["id"] for h in listing["data"]] == [req_id]


def test_booking_confirmation_function(client, auth_headers):
    r = client.get("/functions/send-booking-confirmation", headers=auth_headers)
    assert r.status_code == 405
    assert r.json() == {"error": "Method not allowed"}

    r = client.post("/functions/send-booking-confirmation", json={"bookingId": "1"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields"}

    payload = {"bookingId": "1", "guestEmail": "rui@example.com", "confirmationCode": "ABC234", "totalAmount": 10}
    with patch("innkeep.services.booking_confirmation.send_email", return_value="msg-1"):
        r = client.post("/functions/send-booking-confirmation", json=payload, headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "messageId": "msg-1", "bookingId": "1"}


def test_housekeeping_reminder_function(client, auth_headers, hotel):
    r = client.post(
        "/functions/housekeeping-reminder",
        json={"propertyId": hotel.id, "checkOverdueOnly": False},
        headers=auth_headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["propertyId"] == hotel.id
    assert body["checkOverdueOnly"] is False
    assert body["notificationsCount"] == 0

    r = client.get("/functions/housekeeping-reminder", headers=auth_headers)
    assert r.json()["checkOverdueOnly"] is True


def test_booking_confirmation_accepts_numeric_booking_id(client, auth_headers):
    payload = {"bookingId": 42, "guestEmail": "rui@example.com", "confirmationCode": "ABC234"}
    with patch("innkeep.services.booking_confirmation.send_email", return_value="msg-2"):
        r = client.post("/functions/send-booking-confirmation", json=payload, headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "messageId": "msg-2", "bookingId": "42"}


def test_housekeeping_reminder_flag_defaults_to_overdue_only(client, auth_headers, hotel):
    r = client.post("/functions/housekeeping-reminder", json={"checkOverdueOnly": None}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["checkOverdueOnly"] is True

    r = client.post("/functions/housekeeping-reminder", json={"propertyId": hotel.id}, headers=auth_headers)
    assert r.json()["checkOverdueOnly"] is True
    assert r.json()["propertyId"] == hotel.id


def test_housekeeping_reminder_rejects_malformed_body(client, auth_headers):
    r = client.post("/functions/housekeeping-reminder", json={"checkOverdueOnly": "maybe"}, headers=auth_headers)
    assert r.status_code == 400
    assert "checkOverdueOnly" in r.json()["error"]

    r = client.post("/functions/housekeeping-reminder", json={"propertyId": "grand"}, headers=auth_headers)
    assert r.status_code == 400


def test_reservation_update_and_room_assignment(client, auth_headers, hotel, rooms):
    r = client.post(
        "/reservations",
        json={"property_id": hotel.id, "check_in_date": "2026-10-10", "check_out_date": "2026-10-12"},
        headers=auth_headers,
    )
    reservation_id = r.json()["id"]

    r = client.put(f"/reservations/{reservation_id}", json={"check_out_date": "2026-10-01"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"
    assert client.get(f"/reservations/{reservation_id}", headers=auth_headers).json()["check_out_date"] == "2026-10-12"

    r = client.patch(f"/reservations/{reservation_id}/room", json={"room_id": rooms[1].id}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["room_id"] == rooms[1].id

    other = client.post(
        "/reservations",
        json={"property_id": hotel.id, "check_in_date": "2026-10-11", "check_out_date": "2026-10-13"},
        headers=auth_headers,
    ).json()
    r = client.patch(f"/reservations/{other['id']}/room", json={"room_id": rooms[1].id}, headers=auth_headers)
    assert r.status_code == 409
    assert r.json()["code"] == "CONFLICT"


def test_owner_missing_is_404_for_every_call(client, auth_headers):
    assert client.get("/owners/9999", headers=auth_headers).status_code == 404
    r = client.put("/owners/9999", json={"phone": "+351 900 000 000"}, headers=auth_headers)
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "property_owners 9999 not found"}
    assert client.delete("/owners/9999", headers=auth_headers).status_code == 404


def test_user_update_clears_staff_link(client, auth_headers, housekeeper):
    r = client.post(
        "/users", json={"username": "ana", "password": "pw12345", "staff_id": housekeeper.id}, headers=auth_headers
    )
    user_id = r.json()["id"]
    assert r.json()["staff_id"] == housekeeper.id

    r = client.put(f"/users/{user_id}", json={"staff_id": None}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["staff_id"] is None
    assert r.json()["role"] == "user"


def test_staff_routes(client, auth_headers, hotel):
    r = client.post(
        "/staff",
        json={"property_id": hotel.id, "first_name": "Bruno", "last_name": "Alves", "email": "bruno@innkeep.test", "role": "porter"},
        headers=auth_headers,
    )
    assert r.status_code == 201
    staff_id = r.json()["id"]

    week = {"sat": ["08:00", "16:00"]}
    assert client.put(f"/staff/{staff_id}/schedule", json={"schedule": week}, headers=auth_headers).json()["schedule"] == week
    assert client.patch(f"/staff/{staff_id}/active", json={"is_active": False}, headers=auth_headers).json()["is_active"] is False
    assert client.get("/staff/by-email?email=bruno@innkeep.test", headers=auth_headers).json()["id"] == staff_id
    assert client.get("/staff/by-email?email=ghost@innkeep.test", headers=auth_headers).status_code == 404

    listing = client.get("/staff?is_active=false", headers=auth_headers).json()
    assert [s["id"] for s in listing["data"]] == [staff_id]
    assert client.delete(f"/staff/{staff_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/staff/{staff_id}", headers=auth_headers).status_code == 404


def test_finance_routes(client, auth_headers, hotel):
    for day in ("2026-10-01", "2026-10-15", "2026-11-01"):
        r = client.post(
            "/finance", json={"property_id": hotel.id, "date": day, "daily_metrics": {"revenue": 100}}, headers=auth_headers
        )
        assert r.status_code == 201

    period = client.get(f"/finance/period/{hotel.id}?start=2026-10-01&end=2026-10-31", headers=auth_headers).json()
    assert [f["date"] for f in period] == ["2026-10-01", "2026-10-15"]

    finance_id = period[0]["id"]
    r = client.put(f"/finance/{finance_id}", json={"forecast_data": {"occupancy": 0.8}}, headers=auth_headers)
    assert r.json()["forecast_data"] == {"occupancy": 0.8}
    assert r.json()["daily_metrics"] == {"revenue": 100}
    assert client.get("/finance?date=2026-11-01", headers=auth_headers).json()["pagination"]["totalItems"] == 1


def test_room_type_and_room_routes(client, auth_headers, hotel, rooms):
    r = client.post(
        "/room-types",
        json={"property_id": hotel.id, "name": "Deluxe King", "base_rate": 180, "amenities": ["wifi", "minibar"]},
        headers=auth_headers,
    )
    assert r.status_code == 201
    type_id = r.json()["id"]
    assert client.put(f"/room-types/{type_id}", json={"capacity": 3}, headers=auth_headers).json()["capacity"] == 3
    assert [t["id"] for t in client.get(f"/room-types/by-property/{hotel.id}", headers=auth_headers).json()] == [type_id]

    client.put(f"/rooms/{rooms[0].id}", json={"room_type_id": type_id}, headers=auth_headers)
    assert [x["id"] for x in client.get(f"/rooms/by-room-type/{type_id}", headers=auth_headers).json()] == [rooms[0].id]

    r = client.patch(f"/rooms/{rooms[0].id}/active", json={"is_active": False}, headers=auth_headers)
    assert r.json()["is_active"] is False
    available = client.get(f"/rooms/available/{hotel.id}", headers=auth_headers).json()
    assert [x["number"] for x in available] == ["102"]

    assert client.delete(f"/room-types/{type_id}", headers=auth_headers).status_code == 204


def test_billing_routes(client, auth_headers, hotel):
    r = client.post(
        "/billings",
        json={
            "property_id": hotel.id,
            "billing_date": "2026-10-17",
            "due_date": "2026-10-24",
            "category": "room",
            "items": [{"name": "Room night", "quantity": 2, "unit_price": 100, "tax_rate": 10}],
        },
        headers=auth_headers,
    )
    assert r.status_code == 201
    billing = r.json()
    assert billing["invoice_number"] == "GRA261017001"
    assert billing["amount"] == 220.0
    assert [i["total_amount"] for i in billing["items"]] == [220.0]

    r = client.post(f"/billings/{billing['id']}/items", json={"name": "Late checkout", "unit_price": 30}, headers=auth_headers)
    assert r.status_code == 201
    item_id = r.json()["id"]
    assert client.get(f"/billings/{billing['id']}", headers=auth_headers).json()["amount"] == 250.0
    assert client.delete(f"/billings/{billing['id']}/items/{item_id}", headers=auth_headers).status_code == 204

    r = client.post(f"/billings/{billing['id']}/payments", json={"payment_method": "card", "amount": 220}, headers=auth_headers)
    assert r.json()["status"] == "paid"
    assert client.post(f"/billings/{billing['id']}/payments", json={"payment_method": "card", "amount": 0}, headers=auth_headers).status_code == 422

    by_invoice = client.get("/billings/by-invoice/gra261017001", headers=auth_headers).json()
    assert by_invoice["id"] == billing["id"]
    assert client.get("/billings/by-invoice/NOPE", headers=auth_headers).status_code == 404

    listing = client.get("/billings?amount_min=200&status=paid", headers=auth_headers).json()
    assert [b["id"] for b in listing["data"]] == [billing["id"]]

    stats = client.get(f"/billings/statistics/{hotel.id}?start=2026-10-01&end=2026-10-31", headers=auth_headers).json()
    assert stats["paidBillings"] == 1
    assert stats["paidAmount"] == 220.0
    assert client.get(f"/billings/statistics/{hotel.id}?start=2026-10-31&end=2026-10-01", headers=auth_headers).status_code == 400


def test_recurring_housekeeping_route(client, auth_headers, hotel, rooms):
    r = client.post("/housekeeping/recurring", json={"property_id": hotel.id, "pattern": "daily"}, headers=auth_headers)
    assert r.json() == {"created": 2}
    r = client.post("/housekeeping/recurring", json={"property_id": hotel.id, "pattern": "daily"}, headers=auth_headers)
    assert r.json() == {"created": 0}
    r = client.post("/housekeeping/recurring", json={"property_id": hotel.id, "pattern": "hourly"}, headers=auth_headers)
    assert r.status_code == 422
