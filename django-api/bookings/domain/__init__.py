from bookings.domain.models import Booking, BookingStatus, Room, RoomCategory
from bookings.domain.value_objects import (
    BookingId,
    Capacity,
    ContactInfo,
    DateRange,
    Money,
    PartySize,
    RoomId,
)

__all__ = [
    "Booking",
    "BookingStatus",
    "Room",
    "RoomCategory",
    "BookingId",
    "RoomId",
    "Money",
    "Capacity",
    "ContactInfo",
    "DateRange",
    "PartySize",
]
