"""Booking lifecycle state machine.

Every status change goes through ``transition``; the table below is the
only place that defines which moves are legal.
"""

from dataclasses import replace
from datetime import datetime
from enum import Enum

from bookings.domain.errors import (
    CapacityExceededError,
    InvalidDateRangeError,
    InvalidTransitionError,
    ManualQuoteRequiredError,
)
from bookings.domain.models import Booking, BookingStatus, Room
from bookings.domain.pricing import compute_total
from bookings.domain.value_objects import BookingId, ContactInfo, DateRange, Money, PartySize

TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CHECKED_IN, BookingStatus.CANCELLED}),
    BookingStatus.CHECKED_IN: frozenset({BookingStatus.CHECKED_OUT}),
    BookingStatus.CHECKED_OUT: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


class NotificationEvent(Enum):
    """Guest-facing events raised by a status change."""

    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


NOTIFICATIONS: dict[BookingStatus, NotificationEvent] = {
    BookingStatus.CONFIRMED: NotificationEvent.CONFIRMED,
    BookingStatus.CANCELLED: NotificationEvent.CANCELLED,
}


def allowed_transitions(status: BookingStatus) -> frozenset[BookingStatus]:
    return TRANSITIONS[status]


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in TRANSITIONS[current]


def notification_for(target: BookingStatus) -> NotificationEvent | None:
    return NOTIFICATIONS.get(target)


def create_booking(
    room: Room,
    stay: DateRange,
    party: PartySize,
    contact: ContactInfo,
    *,
    now: datetime,
    booking_id: BookingId | None = None,
) -> Booking:
    """Build a new PENDING booking priced for ``party``.

    Availability must already have been checked by the caller; only the
    date order and room capacity are re-validated here.

    Raises:
        InvalidDateRangeError: If check-in is not before check-out.
        CapacityExceededError: If the party is larger than a per-room category allows.
    """
    if not stay.is_valid:
        raise InvalidDateRangeError("Check-out must be after check-in")
    if not room.category.is_per_head and party.total > room.capacity.value:
        raise CapacityExceededError(room.capacity.value, party.total)

    return Booking(
        id=booking_id or BookingId.new(),
        room_id=room.id,
        contact=contact,
        stay=stay,
        party=party,
        total_price=compute_total(room, stay, party),
        status=BookingStatus.PENDING,
        created_at=now,
        price_is_estimate=room.manual_pricing,
    )


def transition(
    booking: Booking, target: BookingStatus, *, final_price: Money | None = None
) -> Booking:
    """Return a copy of ``booking`` moved to ``target``.

    ``final_price`` settles the amount when confirming and is mandatory for
    bookings whose price is still an estimate. The input booking is never
    modified.

    Raises:
        InvalidTransitionError: If ``target`` is not reachable from the current status.
        ManualQuoteRequiredError: If confirming an estimate without a final price.
        ValueError: If ``final_price`` is given for a target other than CONFIRMED.
    """
    if final_price is not None and target is not BookingStatus.CONFIRMED:
        raise ValueError("A final price can only be set when confirming a booking")
    if not can_transition(booking.status, target):
        raise InvalidTransitionError(booking.status, target)

    if target is BookingStatus.CONFIRMED:
        if final_price is not None:
            return replace(
                booking, status=target, total_price=final_price, price_is_estimate=False
            )
        if booking.price_is_estimate:
            raise ManualQuoteRequiredError(str(booking.id))

    return replace(booking, status=target)
