"""Test configuration and fixtures"""

import os

# Settings are read at import time
os.environ["RESTAURANT_TIMEZONE"] = "UTC"
os.environ["LOG_FORMAT"] = "console"

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from tableplan.data.floor_plan import SECTORS, TABLES
from tableplan.main import app
from tableplan.models.reservation import Customer, Priority, Reservation, ReservationStatus
from tableplan.models.restaurant import Restaurant
from tableplan.store import ReservationStore, get_store

SERVICE_DAY = "2025-10-20"


def at(hhmm: str, day: str = SERVICE_DAY) -> datetime:
    """UTC instant on the service day, e.g. at("19:00")"""
    return datetime.fromisoformat(f"{day}T{hhmm}:00+00:00")


@pytest.fixture
def make_reservation():
    """Factory for reservations with sensible defaults"""
    created = datetime(2025, 10, 20, 10, 0, tzinfo=timezone.utc)

    def _make(
        reservation_id: str,
        table_id: str,
        start: datetime,
        duration_minutes: int,
        party_size: int = 2,
        status: ReservationStatus = ReservationStatus.CONFIRMED,
        name: str = "Guest",
        phone: str = "+5491100000000",
        email: str = None,
    ) -> Reservation:
        return Reservation(
            id=reservation_id,
            table_id=table_id,
            customer=Customer(name=name, phone=phone, email=email),
            party_size=party_size,
            start_time=start,
            duration_minutes=duration_minutes,
            status=status,
            priority=Priority.STANDARD,
            source="web",
            created_at=created,
            updated_at=created,
        )

    return _make


@pytest.fixture
def sectors():
    return list(SECTORS)


@pytest.fixture
def tables():
    return list(TABLES)


@pytest.fixture
def reservation_a(make_reservation):
    """TABLE_M1, 19:00-21:00"""
    return make_reservation("RES_A", "TABLE_M1", at("19:00"), 120, party_size=4, name="John Doe", phone="+1234567890")


@pytest.fixture
def reservation_b(make_reservation):
    """TABLE_M1, 21:30-23:00"""
    return make_reservation(
        "RES_B", "TABLE_M1", at("21:30"), 90, party_size=2,
        name="Jane Smith", phone="+1987654321", email="jane@example.com",
    )


@pytest.fixture
def reservations(reservation_a, reservation_b):
    return [reservation_a, reservation_b]


@pytest.fixture
def store(sectors, tables, reservations):
    """Store over the default floor plan seeded with reservations A and B"""
    restaurant = Restaurant(id="REST_TEST", name="Test Bistro", timezone="UTC")
    return ReservationStore(restaurant, sectors, tables, reservations)


@pytest.fixture
async def client(store):
    """Create test client bound to the test store"""
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
