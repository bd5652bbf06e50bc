"""App settings with defaults, read from the ``BOOKINGS`` dict in Django settings."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Dotted path to the Notifier class used for guest notifications.
    "NOTIFIER": "bookings.notifications.LoggingNotifier",
    # Extra check-then-write attempts after a BookingConflictError.
    "CONFLICT_RETRIES": 2,
    "NOTIFICATION_SENDER": "reservations@localhost",
    "ROOM_CACHE_TIMEOUT": 300,
}


def booking_setting(name: str) -> Any:
    return getattr(settings, "BOOKINGS", {}).get(name, DEFAULTS[name])
