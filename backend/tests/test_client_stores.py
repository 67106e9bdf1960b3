"""
Tests for the client stores driven against the app through TestClient
"""

import pytest

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, USER_EMAIL, USER_PASSWORD
from tuca.client.api import ApiError, TucaApiClient
from tuca.client.stores import (
    AuthStore, DashboardStore, ExperiencesStore, PackagesStore, VehiclesStore,
)


@pytest.fixture
def api(make_client):
    return TucaApiClient(http=make_client())


@pytest.fixture
def admin_api(api):
    AuthStore(api).sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
    return api


def test_api_error_carries_status_and_detail(api):
    with pytest.raises(ApiError) as exc_info:
        api.get("/api/experiences/999")
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Experience not found"


def test_catalog_store_loads(api):
    store = ExperiencesStore(api)
    store.load()
    store.load_featured()
    assert len(store.items) == 3
    assert len(store.featured) == 3
    assert store.is_loading is False
    assert store.error is None
    assert store.get_by_id(2)["title"] == "Snorkeling Adventure"


def test_vehicle_store_skips_featured(api):
    store = VehiclesStore(api)
    store.load_featured()
    assert store.featured == []
    assert store.error is None


def test_missing_item_sets_error(api):
    store = PackagesStore(api)
    assert store.get_by_id(999) is None
    assert store.error == "Package not found"
    store.clear_error()
    assert store.error is None


def test_mutations_keep_local_lists_in_sync(admin_api):
    store = ExperiencesStore(admin_api)
    store.load()
    store.load_featured()

    created = store.create({
        "title": "Night Turtle Watch",
        "description": "Watch hatchlings reach the sea.",
        "price": 60,
        "duration": "2 hours",
        "image": "https://example.com/turtles.jpg",
    })
    assert created["id"] == 4
    assert [i["id"] for i in store.items] == [1, 2, 3, 4]
    assert len(store.featured) == 3

    store.update(4, {"featured": True})
    assert [i["id"] for i in store.featured] == [1, 2, 3, 4]

    store.update(1, {"featured": False, "price": 110})
    assert [i["id"] for i in store.featured] == [2, 3, 4]
    assert store.items[0]["price"] == 110

    assert store.delete(4) is True
    assert [i["id"] for i in store.items] == [1, 2, 3]
    assert [i["id"] for i in store.featured] == [2, 3]


def test_forbidden_mutation_reports_error(api):
    store = ExperiencesStore(api)
    store.load()
    assert store.delete(1) is False
    assert store.error == "Authentication required"
    assert len(store.items) == 3
    assert store.is_loading is False


def test_auth_store_flow(api):
    auth = AuthStore(api)
    auth.init_auth()
    assert auth.is_authenticated is False
    assert auth.error is None

    user = auth.sign_up(USER_EMAIL, USER_PASSWORD, "Ana", "Silva", preferences={"groupSize": 2})
    assert user["groupSize"] == 2
    assert auth.is_authenticated
    assert not auth.is_admin

    profile = auth.update_profile({"activityLevel": "medium"})
    assert profile["activityLevel"] == "medium"

    auth.sign_out()
    assert auth.user is None
    auth.init_auth()
    assert auth.is_authenticated is False

    auth.sign_in(USER_EMAIL, USER_PASSWORD)
    assert auth.user["email"] == USER_EMAIL


def test_auth_store_errors(api):
    auth = AuthStore(api)
    with pytest.raises(ApiError):
        auth.sign_in(ADMIN_EMAIL, "wrong-password")
    assert auth.error == "Invalid credentials"
    assert auth.is_authenticated is False
    assert auth.is_loading is False

    auth.clear_error()
    auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
    assert auth.is_admin

    with pytest.raises(ApiError):
        auth.change_password("not-current", "another-pass-99")
    assert auth.error == "Current password is incorrect"


def test_password_reset_request_message(api):
    message = AuthStore(api).request_password_reset("ghost@example.com")
    assert message.startswith("If an account exists")


def test_dashboard_store(admin_api, make_client):
    stats = DashboardStore(admin_api).load()
    assert stats["totalItems"] == 12

    anonymous = DashboardStore(TucaApiClient(http=make_client()))
    assert anonymous.load() is None
    assert anonymous.error == "Authentication required"
