from django.urls import path

from bookings.handlers import (
    AvailabilityView,
    BookingDetailView,
    BookingListView,
    BookingStatusView,
    BookingSummaryView,
    QuoteView,
    RoomDetailView,
    RoomListView,
)

urlpatterns = [
    path("rooms", RoomListView.as_view(), name="room-list"),
    path("rooms/<str:room_id>", RoomDetailView.as_view(), name="room-detail"),
    path(
        "rooms/<str:room_id>/availability",
        AvailabilityView.as_view(),
        name="room-availability",
    ),
    path("rooms/<str:room_id>/quote", QuoteView.as_view(), name="room-quote"),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("bookings/summary", BookingSummaryView.as_view(), name="booking-summary"),
    path("bookings/<str:booking_id>", BookingDetailView.as_view(), name="booking-detail"),
    path(
        "bookings/<str:booking_id>/status",
        BookingStatusView.as_view(),
        name="booking-status",
    ),
]
