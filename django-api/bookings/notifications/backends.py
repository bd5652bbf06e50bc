"""Notifier implementations."""

import logging

from django.core.mail import send_mail

from bookings.conf import booking_setting
from bookings.domain import Booking, Room
from bookings.domain.lifecycle import NotificationEvent
from bookings.notifications.interfaces import Notifier

logger = logging.getLogger(__name__)

SUBJECTS = {
    NotificationEvent.CONFIRMED: "Your stay at {room} is confirmed",
    NotificationEvent.CANCELLED: "Your booking for {room} was cancelled",
}

BODIES = {
    NotificationEvent.CONFIRMED: (
        "Hello {guest},\n\n"
        "We are happy to confirm your booking for {room} from {check_in} to {check_out} "
        "({nights} nights, {guests} guests).\n"
        "Total: {total}\n\n"
        "Booking reference: {reference}\n"
    ),
    NotificationEvent.CANCELLED: (
        "Hello {guest},\n\n"
        "Your booking for {room} from {check_in} to {check_out} has been cancelled.\n\n"
        "Booking reference: {reference}\n"
    ),
}


def render_message(booking: Booking, room: Room, event: NotificationEvent) -> tuple[str, str]:
    """Return the (subject, body) pair for an event."""
    context = {
        "guest": booking.contact.name,
        "room": room.name,
        "check_in": booking.stay.check_in.isoformat(),
        "check_out": booking.stay.check_out.isoformat(),
        "nights": booking.stay.night_count,
        "guests": booking.party.total,
        "total": booking.total_price,
        "reference": booking.id,
    }
    return SUBJECTS[event].format(**context), BODIES[event].format(**context)


class EmailNotifier(Notifier):
    """Sends a plain-text e-mail to the guest through Django's mail backend."""

    def notify(self, booking: Booking, room: Room, event: NotificationEvent) -> None:
        subject, body = render_message(booking, room, event)
        send_mail(
            subject,
            body,
            booking_setting("NOTIFICATION_SENDER"),
            [booking.contact.email],
            fail_silently=False,
        )
        logger.info("Sent %s e-mail for booking %s", event.value, booking.id)


class LoggingNotifier(Notifier):
    def notify(self, booking: Booking, room: Room, event: NotificationEvent) -> None:
        logger.info(
            "Booking %s for %s: %s (guest %s)",
            booking.id,
            room.name,
            event.value,
            booking.contact.email,
        )


class NullNotifier(Notifier):
    def notify(self, booking: Booking, room: Room, event: NotificationEvent) -> None:
        return None
