"""
Tests for the catalog endpoints shared by every kind
"""

import pytest

NEW_ITEMS = {
    "experiences": {
        "title": "Sancho Bay Kayak",
        "description": "Paddle along the cliffs of Baía do Sancho.",
        "price": 140,
        "duration": "3 hours",
        "image": "https://example.com/kayak.jpg",
        "featured": True,
        "tags": ["Kayak"],
    },
    "accommodations": {
        "title": "Hillside Cabin",
        "description": "Quiet cabin with a hammock deck.",
        "price": 280,
        "image": "https://example.com/cabin.jpg",
        "bedrooms": 2,
        "capacity": 4,
    },
    "packages": {
        "title": "Weekend Escape",
        "description": "Two days of beaches and sunsets.",
        "price": 690,
        "image": "https://example.com/weekend.jpg",
        "duration": "3 days / 2 nights",
        "durationDays": 3,
        "minPeople": 2,
        "maxPeople": 2,
    },
    "vehicles": {
        "vehicleType": "jeep",
        "title": "Trail Jeep",
        "description": "Four seats and real suspension.",
        "pricePerDay": 120,
        "image": "https://example.com/jeep.jpg",
        "capacity": 4,
    },
    "restaurants": {
        "name": "Bar do Meio",
        "description": "Sunset drinks above the beach.",
        "cuisine": "Brazilian",
        "priceRange": "$$",
        "image": "https://example.com/bar.jpg",
    },
}

LABELS = {
    "experiences": "Experience",
    "accommodations": "Accommodation",
    "packages": "Package",
    "vehicles": "Vehicle",
    "restaurants": "Restaurant",
}

SEEDED_COUNTS = {
    "experiences": 3,
    "accommodations": 2,
    "packages": 3,
    "vehicles": 2,
    "restaurants": 2,
}


@pytest.mark.parametrize("plural,count", SEEDED_COUNTS.items())
def test_list_returns_seeded_items_in_id_order(client, plural, count):
    response = client.get(f"/api/{plural}")
    assert response.status_code == 200
    items = response.json()
    assert len(items) == count
    assert [i["id"] for i in items] == list(range(1, count + 1))
    assert all("createdAt" in i for i in items)


def test_seeded_experience_fields(client):
    experience = client.get("/api/experiences/1").json()
    assert experience["title"] == "Dolphin Bay Tour"
    assert experience["price"] == 120
    assert experience["duration"] == "3 hours"
    assert experience["featured"] is True


def test_seeded_vehicle_uses_camel_case(client):
    vehicle = client.get("/api/vehicles/1").json()
    assert vehicle["pricePerDay"] == 85
    assert vehicle["vehicleType"] == "buggy"
    assert "price_per_day" not in vehicle


@pytest.mark.parametrize("plural", ["experiences", "accommodations", "packages", "restaurants"])
def test_featured_lists_only_featured(admin_client, plural):
    payload = dict(NEW_ITEMS[plural], featured=False)
    admin_client.post(f"/api/{plural}", json=payload)

    featured = admin_client.get(f"/api/{plural}/featured").json()
    assert featured
    assert all(i["featured"] for i in featured)
    assert len(featured) == SEEDED_COUNTS[plural]


def test_vehicles_have_no_featured_listing(client):
    assert client.get("/api/vehicles/featured").status_code == 400


@pytest.mark.parametrize("plural,label", LABELS.items())
def test_get_unknown_item_returns_404(client, plural, label):
    response = client.get(f"/api/{plural}/999")
    assert response.status_code == 404
    assert response.json()["detail"] == f"{label} not found"


@pytest.mark.parametrize("plural", NEW_ITEMS)
def test_admin_crud_cycle(admin_client, plural):
    created = admin_client.post(f"/api/{plural}", json=NEW_ITEMS[plural])
    assert created.status_code == 201, created.text
    item = created.json()
    assert item["id"] == SEEDED_COUNTS[plural] + 1

    fetched = admin_client.get(f"/api/{plural}/{item['id']}")
    assert fetched.json() == item

    title_field = "name" if plural == "restaurants" else "title"
    updated = admin_client.patch(f"/api/{plural}/{item['id']}", json={title_field: "Renamed"})
    assert updated.status_code == 200
    assert updated.json()[title_field] == "Renamed"
    assert updated.json()["description"] == item["description"]

    deleted = admin_client.delete(f"/api/{plural}/{item['id']}")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": f"{LABELS[plural]} deleted successfully"}
    assert admin_client.get(f"/api/{plural}/{item['id']}").status_code == 404


@pytest.mark.parametrize("plural", NEW_ITEMS)
def test_mutations_require_admin(client, user_client, plural):
    anonymous = client.post(f"/api/{plural}", json=NEW_ITEMS[plural])
    assert anonymous.status_code == 401
    assert anonymous.json()["detail"] == "Authentication required"

    regular = user_client.post(f"/api/{plural}", json=NEW_ITEMS[plural])
    assert regular.status_code == 403
    assert regular.json()["detail"] == "Admin access required"

    assert user_client.patch(f"/api/{plural}/1", json={}).status_code == 403
    assert user_client.delete(f"/api/{plural}/1").status_code == 403


def test_update_and_delete_unknown_item(admin_client):
    assert admin_client.patch("/api/experiences/999", json={"price": 10}).status_code == 404
    assert admin_client.delete("/api/experiences/999").status_code == 404


@pytest.mark.parametrize("payload", [
    {"price": -1},
    {"rating": 6},
    {"title": ""},
])
def test_create_validation(admin_client, payload):
    response = admin_client.post("/api/experiences", json=dict(NEW_ITEMS["experiences"], **payload))
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request data"


def test_package_group_bounds_are_checked(admin_client):
    bad = dict(NEW_ITEMS["packages"], minPeople=4, maxPeople=2)
    assert admin_client.post("/api/packages", json=bad).status_code == 400

    # Seeded package 1 allows 1-4 people
    response = admin_client.patch("/api/packages/1", json={"minPeople": 6})
    assert response.status_code == 400


def test_update_ignores_null_fields(admin_client):
    response = admin_client.patch("/api/experiences/1", json={"title": None, "price": 130})
    assert response.status_code == 200
    assert response.json()["title"] == "Dolphin Bay Tour"
    assert response.json()["price"] == 130


def test_featured_toggle_moves_item_between_lists(admin_client):
    admin_client.patch("/api/experiences/2", json={"featured": False})
    featured_ids = [i["id"] for i in admin_client.get("/api/experiences/featured").json()]
    assert featured_ids == [1, 3]


def test_delete_cascades_to_favorites_and_testimonials(admin_client, storage):
    admin_client.post("/api/favorites", json={"itemType": "experience", "itemId": 1})
    assert len(admin_client.get("/api/favorites").json()) == 1

    admin_client.delete("/api/experiences/1")

    assert admin_client.get("/api/favorites").json() == []
    testimonial = admin_client.get("/api/testimonials").json()[0]
    assert testimonial["experienceId"] is None
