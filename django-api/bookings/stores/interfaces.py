"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from bookings.domain import Booking, BookingId, BookingStatus, Money, Room, RoomCategory, RoomId


class RoomStore(ABC):
    """Read-only access to the room catalog."""

    @abstractmethod
    def list_rooms(
        self, category: RoomCategory | None = None, query: str | None = None
    ) -> list[Room]:
        """Return rooms ordered by name.

        Optionally restricted to one category and to rooms whose name or
        description contains query, case-insensitively.
        """
        ...

    @abstractmethod
    def get_room(self, room_id: RoomId) -> Room | None:
        """Return a room by ID, or None if not found."""
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def list_bookings_for_room(self, room_id: RoomId) -> list[Booking]:
        """Return every booking of a room, cancelled ones included."""
        ...

    @abstractmethod
    def list_bookings(self, status: BookingStatus | None = None) -> list[Booking]:
        """Return bookings ordered by created_at descending, optionally filtered by status."""
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        """Return a booking by ID, or None if not found."""
        ...

    @abstractmethod
    def save_booking(self, booking: Booking) -> Booking:
        """Persist a new booking.

        The write must be serialized per room: if another non-cancelled
        booking for the same room overlaps the stay by the time of writing,
        raise BookingConflictError instead of saving.
        """
        ...

    @abstractmethod
    def update_booking_status(
        self,
        booking_id: BookingId,
        status: BookingStatus,
        *,
        expected_status: BookingStatus,
        total_price: Money | None = None,
    ) -> None:
        """Compare-and-set a booking's status.

        ``total_price`` settles the price and clears the estimate flag.
        Raise BookingConflictError if the stored status is no longer
        ``expected_status``.
        """
        ...

    @abstractmethod
    def count_by_status(self) -> dict[BookingStatus, int]:
        """Return the number of bookings in each status, zero included."""
        ...
