from django.utils.module_loading import import_string

from bookings.conf import booking_setting
from bookings.notifications.backends import EmailNotifier, LoggingNotifier, NullNotifier
from bookings.notifications.interfaces import Notifier

__all__ = ["Notifier", "EmailNotifier", "LoggingNotifier", "NullNotifier", "load_notifier"]


def load_notifier() -> Notifier:
    """Instantiate the notifier named by the NOTIFIER setting."""
    return import_string(booking_setting("NOTIFIER"))()
