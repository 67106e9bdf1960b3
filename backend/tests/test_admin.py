"""
Tests for the dashboard statistics and the service endpoints
"""


def test_stats_require_admin(client, user_client):
    assert client.get("/api/admin/stats").status_code == 401
    assert user_client.get("/api/admin/stats").status_code == 403


def test_stats_reflect_seeded_data(admin_client):
    response = admin_client.get("/api/admin/stats")
    assert response.status_code == 200
    stats = response.json()

    assert stats["catalog"]["experience"] == {"total": 3, "featured": 3}
    assert stats["catalog"]["vehicle"] == {"total": 2, "featured": 0}
    assert stats["totalItems"] == 12
    assert stats["users"] == 1
    assert stats["admins"] == 1
    assert stats["bookings"] == 0
    assert stats["testimonials"] == 3
    assert stats["pendingTestimonials"] == 0
    assert "lastUpdated" in stats


def test_stats_count_pending_work(admin_client, user_client):
    user_client.post("/api/testimonials", json={"content": "Great!", "rating": 5})
    user_client.post("/api/bookings", json={
        "bookingType": "experience",
        "itemId": 1,
        "startDate": "2026-12-01T10:00:00",
        "endDate": "2026-12-01T12:00:00",
        "guests": 1,
    })
    admin_client.patch("/api/experiences/1", json={"featured": False})

    stats = admin_client.get("/api/admin/stats").json()
    assert stats["users"] == 2
    assert stats["bookings"] == 1
    assert stats["pendingBookings"] == 1
    assert stats["pendingTestimonials"] == 1
    assert stats["catalog"]["experience"]["featured"] == 2


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "API active"


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["components"]["storage"]["backend"] == "memory"
    assert body["components"]["storage"]["users"] == 1


def test_request_id_header(client):
    response = client.get("/api/experiences", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert client.get("/api/experiences").headers["X-Request-ID"]
