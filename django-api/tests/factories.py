"""Builders for domain objects used across the test suite."""

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

from bookings.domain import (
    Booking,
    BookingId,
    BookingStatus,
    Capacity,
    ContactInfo,
    DateRange,
    Money,
    PartySize,
    Room,
    RoomCategory,
    RoomId,
)

# 2025-11-01 is a Saturday; 2025-11-06 a Thursday.
TODAY = date(2025, 11, 1)
NOW = datetime(2025, 11, 1, 9, 30, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


def make_room(
    category: RoomCategory = RoomCategory.SUITE,
    weekday: str = "100",
    weekend: str | None = "150",
    capacity: int = 4,
    manual_pricing: bool = False,
    room_id: str = "00000000-0000-0000-0000-000000000001",
    name: str = "Alpine Retreat Suite",
    description: str = "",
    amenities: tuple[str, ...] = (),
) -> Room:
    return Room(
        id=RoomId(value=UUID(room_id)),
        name=name,
        category=category,
        weekday_price=Money(amount=Decimal(weekday)),
        weekend_price=Money(amount=Decimal(weekend)) if weekend is not None else None,
        capacity=Capacity(value=capacity),
        manual_pricing=manual_pricing,
        description=description,
        amenities=amenities,
    )


def make_booking(
    room: Room,
    check_in: date,
    check_out: date,
    status: BookingStatus = BookingStatus.CONFIRMED,
    created_at: datetime = NOW,
    price_is_estimate: bool = False,
) -> Booking:
    return Booking(
        id=BookingId.new(),
        room_id=room.id,
        contact=ContactInfo(name="Alice Johnson", email="alice@example.com"),
        stay=DateRange(check_in=check_in, check_out=check_out),
        party=PartySize.of_guests(2),
        total_price=Money(amount=Decimal("400")),
        status=status,
        created_at=created_at,
        price_is_estimate=price_is_estimate,
    )
