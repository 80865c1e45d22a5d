import os

# Settings are read at import time
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("CONFLICT_RELEASED_STATUSES", None)

from datetime import date

import pytest
from fastapi.testclient import TestClient

from stayhub.models import User
from stayhub.services.listings import create_property
from stayhub.storage import MemoryStore, get_store


def make_user(store, username):
    return store.create(User, username=username, hashed_password="not-a-real-hash", name=username.title(), email=f"{username}@example.com")


def make_property(store, host_id, **overrides):
    fields = dict(
        title="Modern City Apartment",
        description="Bright apartment downtown with city views.",
        price=189,
        location="Downtown",
        city="Seattle",
        state="Washington",
        country="United States",
        bedrooms=2,
        bathrooms=2,
        guests=4,
        images=["https://images.example.com/1.jpg"],
        amenities=["Wifi", "Kitchen"],
        property_type="apartment",
    )
    fields.update(overrides)
    return create_property(store, host_id, **fields)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def host(store):
    return make_user(store, "host")


@pytest.fixture
def guest(store):
    return make_user(store, "guest")


@pytest.fixture
def stranger(store):
    return make_user(store, "stranger")


@pytest.fixture
def listing(store, host):
    return make_property(store, host.id)


@pytest.fixture
def june():
    return lambda day: date(2025, 6, day)


@pytest.fixture
def client(store):
    from stayhub.main import app

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


LISTING = {
    "title": "Designer Loft Apartment",
    "description": "Stylish urban loft with high ceilings.",
    "price": 175,
    "location": "Brooklyn",
    "city": "Brooklyn",
    "state": "New York",
    "country": "United States",
    "bedrooms": 1,
    "bathrooms": 1,
    "guests": 2,
    "images": ["https://images.example.com/loft.jpg"],
    "amenities": ["Wifi", "Workspace"],
    "property_type": "apartment",
}


def register(client, username):
    res = client.post("/api/register", json={
        "username": username, "password": "secret123", "name": username.title(), "email": f"{username}@example.com",
    })
    assert res.status_code == 201, res.text
    return res.json()


def login(client, username):
    res = client.post("/api/login", json={"username": username, "password": "secret123"})
    assert res.status_code == 200, res.text
    return res.json()


def booking_body(property_id, start, end, guests=2):
    return {
        "property_id": property_id,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "guests": guests,
        "total_price": 900,
    }
