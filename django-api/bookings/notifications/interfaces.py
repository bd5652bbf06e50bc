"""Notifier interface for guest-facing booking events."""

from abc import ABC, abstractmethod

from bookings.domain import Booking, Room
from bookings.domain.lifecycle import NotificationEvent


class Notifier(ABC):
    """Delivers booking notifications. Callers treat delivery as best-effort."""

    @abstractmethod
    def notify(self, booking: Booking, room: Room, event: NotificationEvent) -> None:
        ...
