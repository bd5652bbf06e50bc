"""In-memory stores for tests and local tooling."""

import threading
from collections import defaultdict
from dataclasses import replace

from bookings.domain import Booking, BookingId, BookingStatus, Money, Room, RoomCategory, RoomId
from bookings.domain.availability import find_conflicts
from bookings.domain.errors import BookingConflictError, RoomNotFoundError
from bookings.stores.interfaces import BookingStore, RoomStore


class InMemoryRoomStore(RoomStore):
    """Room catalog held in a dict."""

    def __init__(self, rooms: list[Room] | None = None) -> None:
        self._rooms = {room.id: room for room in rooms or []}

    def add(self, room: Room) -> None:
        self._rooms[room.id] = room

    def list_rooms(
        self, category: RoomCategory | None = None, query: str | None = None
    ) -> list[Room]:
        rooms = list(self._rooms.values())
        if category is not None:
            rooms = [room for room in rooms if room.category is category]
        if query:
            needle = query.lower()
            rooms = [
                room
                for room in rooms
                if needle in room.name.lower() or needle in room.description.lower()
            ]
        return sorted(rooms, key=lambda room: room.name)

    def get_room(self, room_id: RoomId) -> Room | None:
        return self._rooms.get(room_id)


class InMemoryBookingStore(BookingStore):
    """Booking store safe for concurrent use.

    Per-room locks serialize check-then-insert for one room; a store-wide
    lock guards every access to the bookings dict itself.
    """

    def __init__(self, rooms: RoomStore) -> None:
        self._rooms = rooms
        self._bookings: dict[BookingId, Booking] = {}
        self._room_locks: defaultdict[RoomId, threading.Lock] = defaultdict(threading.Lock)
        self._guard = threading.Lock()
        self._data_lock = threading.Lock()

    def _lock_for(self, room_id: RoomId) -> threading.Lock:
        with self._guard:
            return self._room_locks[room_id]

    def _snapshot(self) -> list[Booking]:
        with self._data_lock:
            return list(self._bookings.values())

    def list_bookings_for_room(self, room_id: RoomId) -> list[Booking]:
        return [b for b in self._snapshot() if b.room_id == room_id]

    def list_bookings(self, status: BookingStatus | None = None) -> list[Booking]:
        bookings = [b for b in self._snapshot() if status is None or b.status is status]
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        with self._data_lock:
            return self._bookings.get(booking_id)

    def save_booking(self, booking: Booking) -> Booking:
        room = self._rooms.get_room(booking.room_id)
        if room is None:
            raise RoomNotFoundError(str(booking.room_id))

        with self._lock_for(booking.room_id):
            if find_conflicts(room, booking.stay, self.list_bookings_for_room(room.id)):
                raise BookingConflictError(str(booking.id))
            with self._data_lock:
                self._bookings[booking.id] = booking
        return booking

    def update_booking_status(
        self,
        booking_id: BookingId,
        status: BookingStatus,
        *,
        expected_status: BookingStatus,
        total_price: Money | None = None,
    ) -> None:
        current = self.get_booking(booking_id)
        if current is None:
            raise BookingConflictError(str(booking_id))

        with self._lock_for(current.room_id), self._data_lock:
            current = self._bookings[booking_id]
            if current.status is not expected_status:
                raise BookingConflictError(str(booking_id))
            updated = replace(current, status=status)
            if total_price is not None:
                updated = replace(updated, total_price=total_price, price_is_estimate=False)
            self._bookings[booking_id] = updated

    def count_by_status(self) -> dict[BookingStatus, int]:
        counts = {status: 0 for status in BookingStatus}
        for booking in self._snapshot():
            counts[booking.status] += 1
        return counts
