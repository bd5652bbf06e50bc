"""Django ORM implementation of the room and booking stores."""

import logging

from django.db import OperationalError, transaction
from django.db.models import Count, Q
from django.utils import timezone

from bookings import models as orm
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
from bookings.domain.errors import BookingConflictError, RoomNotFoundError
from bookings.stores.interfaces import BookingStore, RoomStore

logger = logging.getLogger(__name__)

LOCK_ERROR_MARKERS = ("database is locked", "database table is locked", "deadlock detected")


def is_lock_error(exc: OperationalError) -> bool:
    """True for errors raised when a concurrent writer holds the lock."""
    message = str(exc).lower()
    return any(marker in message for marker in LOCK_ERROR_MARKERS)


def room_to_domain(row: orm.Room) -> Room:
    return Room(
        id=RoomId(value=row.id),
        name=row.name,
        category=RoomCategory(row.category),
        weekday_price=Money(amount=row.weekday_price),
        weekend_price=Money(amount=row.weekend_price) if row.weekend_price is not None else None,
        capacity=Capacity(value=row.capacity),
        manual_pricing=row.manual_pricing,
        description=row.description,
        amenities=tuple(row.amenities or ()),
    )


def booking_to_domain(row: orm.Booking) -> Booking:
    return Booking(
        id=BookingId(value=row.id),
        room_id=RoomId(value=row.room_id),
        contact=ContactInfo(
            name=row.guest_name, email=row.guest_email, phone=row.guest_phone or None
        ),
        stay=DateRange(check_in=row.check_in, check_out=row.check_out),
        party=PartySize(adults=row.adults, kids=row.kids),
        total_price=Money(amount=row.total_price),
        status=BookingStatus(row.status),
        created_at=row.created_at,
        price_is_estimate=row.price_is_estimate,
    )


class DjangoRoomStore(RoomStore):
    """Database-backed room catalog."""

    def list_rooms(
        self, category: RoomCategory | None = None, query: str | None = None
    ) -> list[Room]:
        rows = orm.Room.objects.all()
        if category is not None:
            rows = rows.filter(category=category.value)
        if query:
            rows = rows.filter(Q(name__icontains=query) | Q(description__icontains=query))
        return [room_to_domain(row) for row in rows]

    def get_room(self, room_id: RoomId) -> Room | None:
        row = orm.Room.objects.filter(pk=room_id.value).first()
        return room_to_domain(row) if row is not None else None


class DjangoBookingStore(BookingStore):
    """Database-backed booking store.

    Writes for one room are serialized by locking the room row for the
    duration of the check-then-insert transaction.
    """

    def list_bookings_for_room(self, room_id: RoomId) -> list[Booking]:
        rows = orm.Booking.objects.filter(room_id=room_id.value)
        return [booking_to_domain(row) for row in rows]

    def list_bookings(self, status: BookingStatus | None = None) -> list[Booking]:
        rows = orm.Booking.objects.all()
        if status is not None:
            rows = rows.filter(status=status.value)
        return [booking_to_domain(row) for row in rows.order_by("-created_at")]

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = orm.Booking.objects.filter(pk=booking_id.value).first()
        return booking_to_domain(row) if row is not None else None

    def save_booking(self, booking: Booking) -> Booking:
        try:
            row = self._insert(booking)
        except OperationalError as exc:
            if not is_lock_error(exc):
                raise
            logger.warning("Lock timeout saving booking %s for room %s", booking.id, booking.room_id)
            raise BookingConflictError(str(booking.id)) from exc
        return booking_to_domain(row)

    def _insert(self, booking: Booking) -> orm.Booking:
        with transaction.atomic():
            room = orm.Room.objects.select_for_update().filter(pk=booking.room_id.value).first()
            if room is None:
                raise RoomNotFoundError(str(booking.room_id))

            overlapping = (
                orm.Booking.objects.filter(
                    room=room,
                    check_in__lt=booking.stay.check_out,
                    check_out__gt=booking.stay.check_in,
                )
                .exclude(status=BookingStatus.CANCELLED.value)
                .exists()
            )
            if overlapping:
                raise BookingConflictError(str(booking.id))

            row = orm.Booking.objects.create(
                id=booking.id.value,
                room=room,
                guest_name=booking.contact.name,
                guest_email=booking.contact.email,
                guest_phone=booking.contact.phone,
                check_in=booking.stay.check_in,
                check_out=booking.stay.check_out,
                adults=booking.party.adults,
                kids=booking.party.kids,
                total_price=booking.total_price.amount,
                price_is_estimate=booking.price_is_estimate,
                status=booking.status.value,
                created_at=booking.created_at,
            )
        return row

    def update_booking_status(
        self,
        booking_id: BookingId,
        status: BookingStatus,
        *,
        expected_status: BookingStatus,
        total_price: Money | None = None,
    ) -> None:
        changes = {"status": status.value}
        if total_price is not None:
            changes.update(total_price=total_price.amount, price_is_estimate=False)

        # update() skips auto_now, so stamp updated_at explicitly.
        changes["updated_at"] = timezone.now()
        try:
            updated = orm.Booking.objects.filter(
                pk=booking_id.value, status=expected_status.value
            ).update(**changes)
        except OperationalError as exc:
            if not is_lock_error(exc):
                raise
            raise BookingConflictError(str(booking_id)) from exc
        if updated == 0:
            raise BookingConflictError(str(booking_id))

    def count_by_status(self) -> dict[BookingStatus, int]:
        counts = {status: 0 for status in BookingStatus}
        rows = orm.Booking.objects.values("status").annotate(total=Count("id")).order_by()
        for row in rows:
            counts[BookingStatus(row["status"])] = row["total"]
        return counts
