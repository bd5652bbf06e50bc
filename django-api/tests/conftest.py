"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from bookings.domain import ContactInfo, Room, RoomCategory
from bookings.stores.memory_store import InMemoryBookingStore, InMemoryRoomStore
from factories import make_room


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def suite() -> Room:
    return make_room()


@pytest.fixture
def villa() -> Room:
    return make_room(
        category=RoomCategory.RESORT_VILLA,
        weekday="50",
        weekend=None,
        capacity=8,
        room_id="00000000-0000-0000-0000-000000000002",
        name="Royal Palms Resort Villa",
    )


@pytest.fixture
def guest() -> ContactInfo:
    return ContactInfo(name="Bob Smith", email="bob@example.com", phone="+15550100")


@pytest.fixture
def room_store(suite: Room, villa: Room) -> InMemoryRoomStore:
    return InMemoryRoomStore([suite, villa])


@pytest.fixture
def booking_store(room_store: InMemoryRoomStore) -> InMemoryBookingStore:
    return InMemoryBookingStore(room_store)
