import os

# Must be set before tuca.core.settings is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["ENABLE_RATE_LIMITING"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

import pytest
from fastapi.testclient import TestClient

from tuca.core.sessions import session_store
from tuca.main import app
from tuca.storage.memory import MemStorage
from tuca.storage.provider import set_storage

ADMIN_EMAIL = "admin@tucanoronha.com"
ADMIN_PASSWORD = "admin123"
USER_EMAIL = "traveler@example.com"
USER_PASSWORD = "island-breeze-42"


@pytest.fixture
def storage():
    """Fresh seeded in-memory storage installed as the app storage"""
    store = MemStorage()
    set_storage(store)
    session_store.clear()
    yield store
    set_storage(None)
    session_store.clear()


@pytest.fixture
def make_client(storage):
    def _make():
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()


def login(client: TestClient, email: str, password: str) -> TestClient:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return client


def register(client: TestClient, email: str = USER_EMAIL, password: str = USER_PASSWORD, **extra) -> dict:
    payload = {"email": email, "password": password, "firstName": "Ana", "lastName": "Silva", **extra}
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["user"]


@pytest.fixture
def admin_client(make_client):
    return login(make_client(), ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def user_client(make_client):
    client = make_client()
    register(client)
    return client


@pytest.fixture
def other_user_client(make_client):
    client = make_client()
    register(client, email="second@example.com", password="coral-reef-77")
    return client
