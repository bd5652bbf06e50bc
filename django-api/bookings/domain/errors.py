"""Domain error codes for the bookings module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    INVALID_ROOM_ID = "INVALID_ROOM_ID"
    INVALID_BOOKING_ID = "INVALID_BOOKING_ID"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_STATUS = "INVALID_STATUS"
    INVALID_CATEGORY = "INVALID_CATEGORY"
    UNAVAILABLE = "UNAVAILABLE"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    MANUAL_QUOTE_REQUIRED = "MANUAL_QUOTE_REQUIRED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class RoomNotFoundError(DomainError):
    """Raised when a room is not found."""

    def __init__(self, room_id: str) -> None:
        super().__init__(
            code=ErrorCode.ROOM_NOT_FOUND,
            message="Room not found",
        )
        self.room_id = room_id


class BookingNotFoundError(DomainError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class InvalidRoomIdError(DomainError):
    """Raised when a room ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ROOM_ID,
            message="Invalid room ID format",
        )


class InvalidBookingIdError(DomainError):
    """Raised when a booking ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BOOKING_ID,
            message="Invalid booking ID format",
        )


class InvalidStatusError(DomainError):
    """Raised when a status name is not a known booking status."""

    def __init__(self, status: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS,
            message=f"Unknown booking status {status!r}",
        )
        self.status = status


class InvalidCategoryError(DomainError):
    """Raised when a category name is not a known room category."""

    def __init__(self, category: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CATEGORY,
            message=f"Unknown room category {category!r}",
        )
        self.category = category


class InvalidDateRangeError(DomainError):
    """Raised when check-in is not before check-out, or lies in the past."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DATE_RANGE,
            message=reason,
        )


class UnavailableError(DomainError):
    """Raised when the room is already booked for part of the stay."""

    def __init__(self, room_id: str) -> None:
        super().__init__(
            code=ErrorCode.UNAVAILABLE,
            message="Room is not available for the selected dates",
        )
        self.room_id = room_id


class InvalidTransitionError(DomainError):
    """Raised when a status change is not allowed from the current state."""

    def __init__(self, current: Enum, requested: Enum) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Cannot move booking from {current.value} to {requested.value}",
        )
        self.current = current
        self.requested = requested


class BookingConflictError(DomainError):
    """Raised by a store when a concurrent write won the race."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_CONFLICT,
            message="Booking was modified concurrently",
        )
        self.booking_id = booking_id


class CapacityExceededError(DomainError):
    """Raised when the party does not fit in the room."""

    def __init__(self, capacity: int, requested: int) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message=f"Room sleeps at most {capacity} guests, {requested} requested",
        )
        self.capacity = capacity
        self.requested = requested


class ManualQuoteRequiredError(DomainError):
    """Raised when confirming a quote-only booking without a final price."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.MANUAL_QUOTE_REQUIRED,
            message="A final price is required to confirm a quote-only booking",
        )
        self.booking_id = booking_id
