"""Availability checker.

Pure functions of their inputs: the current date is always passed in by the
caller so results never depend on a wall clock.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from bookings.domain.models import Booking, BookingStatus, Room
from bookings.domain.value_objects import BookingId, DateRange, RoomId


class UnavailableReason(Enum):
    """Why a stay request cannot be accepted."""

    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    CHECK_IN_IN_PAST = "CHECK_IN_IN_PAST"
    ALREADY_BOOKED = "ALREADY_BOOKED"


@dataclass(frozen=True)
class AvailabilityResult:
    """Outcome of an availability check for one room and stay."""

    room_id: RoomId
    stay: DateRange
    available: bool
    reason: UnavailableReason | None = None
    conflicting: tuple[BookingId, ...] = ()


def date_range_problem(stay: DateRange, *, today: date) -> UnavailableReason | None:
    """Return what is wrong with the requested dates, or None if they are bookable."""
    if not stay.is_valid:
        return UnavailableReason.INVALID_DATE_RANGE
    if stay.check_in < today:
        return UnavailableReason.CHECK_IN_IN_PAST
    return None


def find_conflicts(
    room: Room, stay: DateRange, existing: Iterable[Booking]
) -> list[Booking]:
    """Return the bookings of ``room`` that share a night with ``stay``.

    Bookings for other rooms are ignored even if the caller passed them in,
    and cancelled bookings never block a new request.
    """
    return [
        booking
        for booking in existing
        if booking.room_id == room.id
        and booking.status is not BookingStatus.CANCELLED
        and stay.overlaps(booking.stay)
    ]


def check_availability(
    room: Room, stay: DateRange, existing: Iterable[Booking], *, today: date
) -> AvailabilityResult:
    problem = date_range_problem(stay, today=today)
    if problem is not None:
        return AvailabilityResult(
            room_id=room.id, stay=stay, available=False, reason=problem
        )

    conflicts = find_conflicts(room, stay, existing)
    if conflicts:
        return AvailabilityResult(
            room_id=room.id,
            stay=stay,
            available=False,
            reason=UnavailableReason.ALREADY_BOOKED,
            conflicting=tuple(booking.id for booking in conflicts),
        )
    return AvailabilityResult(room_id=room.id, stay=stay, available=True)


def is_available(
    room: Room, stay: DateRange, existing: Iterable[Booking], *, today: date
) -> bool:
    """True iff the stay is valid, not retroactive and overlaps no live booking."""
    return check_availability(room, stay, existing, today=today).available
