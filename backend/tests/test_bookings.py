"""
Tests for bookings: pricing, party size, visibility and status changes
"""

import pytest


def book(client, booking_type="experience", item_id=1, start="2026-12-01T10:00:00",
         end="2026-12-01T13:00:00", guests=2):
    return client.post("/api/bookings", json={
        "bookingType": booking_type,
        "itemId": item_id,
        "startDate": start,
        "endDate": end,
        "guests": guests,
    })


def test_booking_requires_session(client):
    assert book(client).status_code == 401
    assert client.get("/api/bookings").status_code == 401


@pytest.mark.parametrize("booking_type,item_id,start,end,guests,expected", [
    # Experiences and packages are priced per guest
    ("experience", 1, "2026-12-01T10:00:00", "2026-12-01T13:00:00", 3, 360.0),
    ("package", 1, "2026-12-01T00:00:00", "2026-12-06T00:00:00", 2, 2590.0),
    # Accommodations and vehicles are priced per day
    ("accommodation", 2, "2026-12-01T14:00:00", "2026-12-05T11:00:00", 2, 1560.0),
    ("vehicle", 1, "2026-12-01T09:00:00", "2026-12-04T09:00:00", 4, 255.0),
    ("vehicle", 2, "2026-12-01T09:00:00", "2026-12-01T18:00:00", 1, 45.0),
    ("vehicle", 2, "2026-12-01T18:00:00", "2026-12-04T09:00:00", 1, 135.0),
    # Offsets are converted to UTC before counting days
    ("vehicle", 2, "2026-12-01T22:00:00-03:00", "2026-12-02T20:00:00-03:00", 1, 45.0),
    ("restaurant", 1, "2026-12-01T20:00:00", "2026-12-01T22:00:00", 6, 0.0),
])
def test_total_price_per_kind(user_client, booking_type, item_id, start, end, guests, expected):
    response = book(user_client, booking_type, item_id, start, end, guests)
    assert response.status_code == 201, response.text
    booking = response.json()
    assert booking["totalPrice"] == expected
    assert booking["status"] == "pending"
    assert booking["bookingType"] == booking_type
    assert booking["userId"] == 2


def test_unknown_item(user_client):
    response = book(user_client, "accommodation", 999)
    assert response.status_code == 400
    assert response.json()["detail"] == "Accommodation 999 does not exist"


@pytest.mark.parametrize("booking_type,item_id,guests", [
    ("package", 1, 5),
    ("accommodation", 2, 3),
    ("vehicle", 2, 3),
])
def test_party_size_limits(user_client, booking_type, item_id, guests):
    response = book(user_client, booking_type, item_id, guests=guests)
    assert response.status_code == 400


def test_larger_package_accepts_bigger_group(user_client):
    assert book(user_client, "package", 3, guests=6).status_code == 201


@pytest.mark.parametrize("overrides", [
    {"guests": 0},
    {"end": "2026-11-30T10:00:00"},
])
def test_request_validation(user_client, overrides):
    assert book(user_client, **overrides).status_code == 400


def test_users_only_see_their_own_bookings(user_client, other_user_client, admin_client):
    mine = book(user_client).json()
    theirs = book(other_user_client).json()

    assert [b["id"] for b in user_client.get("/api/bookings").json()] == [mine["id"]]
    assert user_client.get(f"/api/bookings/{theirs['id']}").status_code == 403

    all_ids = [b["id"] for b in admin_client.get("/api/bookings").json()]
    assert all_ids == [mine["id"], theirs["id"]]
    assert admin_client.get(f"/api/bookings/{mine['id']}").status_code == 200


def test_missing_booking(user_client):
    response = user_client.get("/api/bookings/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Booking not found"


def test_cancel_own_booking(user_client):
    booking_id = book(user_client).json()["id"]

    response = user_client.patch(f"/api/bookings/{booking_id}/cancel")
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"

    again = user_client.patch(f"/api/bookings/{booking_id}/cancel")
    assert again.status_code == 400
    assert again.json()["detail"] == "Cannot cancel a cancelled booking"


def test_cannot_cancel_someone_elses_booking(user_client, other_user_client):
    booking_id = book(user_client).json()["id"]
    assert other_user_client.patch(f"/api/bookings/{booking_id}/cancel").status_code == 403


def test_confirmed_booking_can_be_cancelled_but_completed_cannot(user_client, admin_client):
    booking_id = book(user_client).json()["id"]

    confirmed = admin_client.patch(f"/api/bookings/{booking_id}/status", json={"status": "confirmed"})
    assert confirmed.json()["status"] == "confirmed"
    assert user_client.patch(f"/api/bookings/{booking_id}/cancel").status_code == 200

    second_id = book(user_client).json()["id"]
    admin_client.patch(f"/api/bookings/{second_id}/status", json={"status": "completed"})
    response = user_client.patch(f"/api/bookings/{second_id}/cancel")
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot cancel a completed booking"


def test_status_update_is_admin_only(user_client, admin_client):
    booking_id = book(user_client).json()["id"]

    assert user_client.patch(f"/api/bookings/{booking_id}/status", json={"status": "confirmed"}).status_code == 403
    assert admin_client.patch(f"/api/bookings/{booking_id}/status", json={"status": "unknown"}).status_code == 400
    assert admin_client.patch("/api/bookings/999/status", json={"status": "confirmed"}).status_code == 404
