"""Booking service - all business logic lives here.

Services:
- Depend only on interfaces (stores, notifier)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or raise domain errors
"""

import logging
from collections.abc import Callable
from datetime import date, datetime

from django.utils import timezone

from bookings.domain import (
    Booking,
    BookingId,
    BookingStatus,
    ContactInfo,
    DateRange,
    Money,
    PartySize,
    Room,
    RoomCategory,
    RoomId,
)
from bookings.domain import lifecycle
from bookings.domain.availability import (
    AvailabilityResult,
    UnavailableReason,
    check_availability,
    date_range_problem,
)
from bookings.domain.errors import (
    BookingConflictError,
    BookingNotFoundError,
    InvalidBookingIdError,
    InvalidCategoryError,
    InvalidDateRangeError,
    InvalidRoomIdError,
    InvalidStatusError,
    InvalidTransitionError,
    RoomNotFoundError,
    UnavailableError,
)
from bookings.domain.pricing import PriceQuote, build_quote
from bookings.notifications import Notifier, NullNotifier
from bookings.stores.interfaces import BookingStore, RoomStore

logger = logging.getLogger(__name__)

DATE_RANGE_MESSAGES = {
    UnavailableReason.INVALID_DATE_RANGE: "Check-out must be after check-in",
    UnavailableReason.CHECK_IN_IN_PAST: "Check-in cannot be in the past",
}


def parse_status(value: str | BookingStatus) -> BookingStatus:
    """Resolve a status name or value.

    Raises:
        InvalidStatusError: If the value names no booking status.
    """
    if isinstance(value, BookingStatus):
        return value
    try:
        return BookingStatus(value.upper())
    except ValueError:
        raise InvalidStatusError(value) from None


def parse_category(value: str | RoomCategory) -> RoomCategory:
    """Resolve a category name.

    Raises:
        InvalidCategoryError: If the value names no room category.
    """
    if isinstance(value, RoomCategory):
        return value
    try:
        return RoomCategory(value.upper())
    except ValueError:
        raise InvalidCategoryError(value) from None


class BookingService:
    """Service for availability, pricing and booking lifecycle operations."""

    def __init__(
        self,
        rooms: RoomStore,
        bookings: BookingStore,
        notifier: Notifier | None = None,
        *,
        clock: Callable[[], datetime] = timezone.now,
        conflict_retries: int = 2,
    ) -> None:
        self._rooms = rooms
        self._bookings = bookings
        self._notifier = notifier or NullNotifier()
        self._clock = clock
        self._conflict_retries = conflict_retries

    def _today(self) -> date:
        return timezone.localdate(self._clock())

    def _room(self, room_id: str) -> Room:
        try:
            parsed = RoomId.from_string(room_id)
        except ValueError:
            raise InvalidRoomIdError() from None
        room = self._rooms.get_room(parsed)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    def _booking(self, booking_id: str) -> Booking:
        try:
            parsed = BookingId.from_string(booking_id)
        except ValueError:
            raise InvalidBookingIdError() from None
        booking = self._bookings.get_booking(parsed)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def list_rooms(
        self, category: str | RoomCategory | None = None, query: str | None = None
    ) -> list[Room]:
        """Return the room catalog, optionally filtered.

        Raises:
            InvalidCategoryError: If category names no room category.
        """
        parsed = parse_category(category) if category else None
        query = query.strip() if query else None
        return self._rooms.list_rooms(category=parsed, query=query or None)

    def get_room(self, room_id: str) -> Room:
        """Return a room by ID.

        Raises:
            InvalidRoomIdError: If the room_id is not a valid UUID.
            RoomNotFoundError: If the room does not exist.
        """
        return self._room(room_id)

    def check_availability(self, room_id: str, stay: DateRange) -> AvailabilityResult:
        """Check whether a room can be booked for a stay.

        Raises:
            InvalidRoomIdError: If the room_id is not a valid UUID.
            RoomNotFoundError: If the room does not exist.
        """
        room = self._room(room_id)
        existing = self._bookings.list_bookings_for_room(room.id)
        return check_availability(room, stay, existing, today=self._today())

    def quote(self, room_id: str, stay: DateRange, party: PartySize) -> PriceQuote:
        """Price a stay without reserving it.

        Raises:
            InvalidRoomIdError: If the room_id is not a valid UUID.
            RoomNotFoundError: If the room does not exist.
            InvalidDateRangeError: If check-in is not before check-out.
        """
        room = self._room(room_id)
        if not stay.is_valid:
            raise InvalidDateRangeError(DATE_RANGE_MESSAGES[UnavailableReason.INVALID_DATE_RANGE])
        return build_quote(room, stay, party)

    def create_booking(
        self, room_id: str, stay: DateRange, party: PartySize, contact: ContactInfo
    ) -> Booking:
        """Create a PENDING booking after re-checking availability.

        The check-then-write sequence is repeated when the store reports a
        concurrent conflicting write, up to the configured retry count.

        Raises:
            InvalidRoomIdError: If the room_id is not a valid UUID.
            RoomNotFoundError: If the room does not exist.
            InvalidDateRangeError: If the stay is inverted, empty or starts in the past.
            CapacityExceededError: If the party does not fit in the room.
            UnavailableError: If the room is already booked for part of the stay.
        """
        room = self._room(room_id)

        for attempt in range(self._conflict_retries + 1):
            today = self._today()
            problem = date_range_problem(stay, today=today)
            if problem is not None:
                raise InvalidDateRangeError(DATE_RANGE_MESSAGES[problem])

            existing = self._bookings.list_bookings_for_room(room.id)
            if not check_availability(room, stay, existing, today=today).available:
                raise UnavailableError(room_id)

            booking = lifecycle.create_booking(room, stay, party, contact, now=self._clock())
            try:
                saved = self._bookings.save_booking(booking)
            except BookingConflictError:
                logger.warning(
                    "Conflicting write for room %s %s (attempt %d)", room.id, stay, attempt + 1
                )
                continue

            logger.info(
                "Created booking %s for room %s %s total %s",
                saved.id,
                room.id,
                stay,
                saved.total_price,
            )
            return saved

        raise UnavailableError(room_id)

    def get_booking(self, booking_id: str) -> Booking:
        """Return a booking by ID.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
        """
        return self._booking(booking_id)

    def list_bookings(self, status: str | BookingStatus | None = None) -> list[Booking]:
        """Return bookings newest first, optionally filtered by status."""
        parsed = parse_status(status) if status is not None else None
        return self._bookings.list_bookings(parsed)

    def summarize_bookings(self) -> dict[BookingStatus, int]:
        """Return the number of bookings per status."""
        return self._bookings.count_by_status()

    def transition_booking(
        self,
        booking_id: str,
        target: str | BookingStatus,
        *,
        final_price: Money | None = None,
    ) -> Booking:
        """Move a booking to ``target`` and notify the guest when relevant.

        Notification failures are logged and never propagate.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
            InvalidStatusError: If ``target`` names no booking status.
            InvalidTransitionError: If the move is not allowed from the current status.
            ManualQuoteRequiredError: If confirming an estimate without a final price.
            BookingConflictError: If the booking changed since it was read.
        """
        booking = self._booking(booking_id)
        target_status = parse_status(target)

        try:
            updated = lifecycle.transition(booking, target_status, final_price=final_price)
        except InvalidTransitionError as exc:
            logger.warning("Rejected transition for booking %s: %s", booking.id, exc.message)
            raise

        if (
            target_status is BookingStatus.CHECKED_IN
            and self._today() < booking.stay.check_in
        ):
            logger.warning(
                "Booking %s checked in before its check-in date %s",
                booking.id,
                booking.stay.check_in,
            )

        self._bookings.update_booking_status(
            booking.id,
            updated.status,
            expected_status=booking.status,
            total_price=final_price,
        )
        logger.info(
            "Booking %s moved from %s to %s",
            booking.id,
            booking.status.value,
            updated.status.value,
        )

        event = lifecycle.notification_for(updated.status)
        if event is not None:
            self._dispatch(updated, event)
        return updated

    def _dispatch(self, booking: Booking, event: lifecycle.NotificationEvent) -> None:
        try:
            room = self._rooms.get_room(booking.room_id)
            if room is None:
                raise RoomNotFoundError(str(booking.room_id))
            self._notifier.notify(booking, room, event)
        except Exception:
            logger.exception("Failed to send %s notification for booking %s", event.value, booking.id)
