"""
Shared fixtures: a fresh EntityStore per test, a TestClient bound to it,
and helpers for registering users through the API.
"""

import datetime
import os

# Must be set before lifeshare.core.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from lifeshare.main import create_app
from lifeshare.models.user import NewUser
from lifeshare.services.store import EntityStore


def make_new_user(**overrides) -> NewUser:
    """NewUser with sensible defaults; username/email derived from username."""
    username = overrides.pop("username", "alice")
    fields = {
        "username": username,
        "password_hash": "not-a-real-hash",
        "full_name": username.capitalize(),
        "age": 30,
        "email": f"{username}@example.com",
        "phone": "555-0100",
        "blood_group": "O+",
        "address_line1": "1 Main St",
        "city": "Boston",
        "state": "MA",
        "postal_code": "02108",
    }
    fields.update(overrides)
    return NewUser(**fields)


def registration_payload(username: str = "alice", **overrides) -> dict:
    payload = {
        "username": username,
        "password": "s3cret-pass",
        "fullName": username.capitalize() + " Donor",
        "age": 30,
        "email": f"{username}@example.com",
        "phone": "555-0100",
        "bloodGroup": "O+",
        "addressLine1": "1 Main St",
        "city": "Boston",
        "state": "MA",
        "postalCode": "02108",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def store() -> EntityStore:
    return EntityStore()


@pytest.fixture
def client(store) -> TestClient:
    with TestClient(create_app(store=store)) as c:
        yield c


@pytest.fixture
def register(client):
    """Register a user through the API; returns the JSON response body."""
    def _register(username: str = "alice", **overrides) -> dict:
        response = client.post("/api/v1/auth/register", json=registration_payload(username, **overrides))
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture
def auth_headers(register):
    body = register("alice")
    return {"Authorization": f"Bearer {body['accessToken']}"}


@pytest.fixture
def today() -> datetime.date:
    return datetime.date.today()
