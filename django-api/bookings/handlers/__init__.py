from bookings.handlers.views import (
    AvailabilityView,
    BookingDetailView,
    BookingListView,
    BookingStatusView,
    BookingSummaryView,
    QuoteView,
    RoomDetailView,
    RoomListView,
)

__all__ = [
    "AvailabilityView",
    "BookingDetailView",
    "BookingListView",
    "BookingStatusView",
    "BookingSummaryView",
    "QuoteView",
    "RoomDetailView",
    "RoomListView",
]
