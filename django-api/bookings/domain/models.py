"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in bookings/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from bookings.domain.value_objects import (
    BookingId,
    Capacity,
    ContactInfo,
    DateRange,
    Money,
    PartySize,
    RoomId,
)


class RoomCategory(Enum):
    """Closed set of accommodation categories."""

    STANDARD_ROOM = "STANDARD_ROOM"
    SUITE = "SUITE"
    CHALET = "CHALET"
    RESORT_VILLA = "RESORT_VILLA"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()

    @property
    def is_per_head(self) -> bool:
        """Resort villas are priced per occupant, every other category per room."""
        return self is RoomCategory.RESORT_VILLA


class BookingStatus(Enum):
    """Booking lifecycle states."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    CANCELLED = "CANCELLED"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.CHECKED_OUT, BookingStatus.CANCELLED)


@dataclass(frozen=True)
class Room:
    """Domain representation of a bookable room.

    Read-only from the booking engine's point of view; inventory
    management owns its lifecycle.
    """

    id: RoomId
    name: str
    category: RoomCategory
    weekday_price: Money
    capacity: Capacity
    weekend_price: Money | None = None
    manual_pricing: bool = False
    description: str = ""
    amenities: tuple[str, ...] = ()


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    room_id: RoomId
    contact: ContactInfo
    stay: DateRange
    party: PartySize
    total_price: Money
    status: BookingStatus
    created_at: datetime
    price_is_estimate: bool = False
