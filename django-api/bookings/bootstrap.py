"""Wires the booking service to its Django-backed collaborators."""

from bookings.conf import booking_setting
from bookings.notifications import load_notifier
from bookings.services.booking_service import BookingService
from bookings.stores.django_store import DjangoBookingStore, DjangoRoomStore


def build_booking_service() -> BookingService:
    """Create a BookingService using the database stores and configured notifier."""
    return BookingService(
        rooms=DjangoRoomStore(),
        bookings=DjangoBookingStore(),
        notifier=load_notifier(),
        conflict_retries=booking_setting("CONFLICT_RETRIES"),
    )
