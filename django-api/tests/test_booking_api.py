"""Integration tests for the booking API.

Dates are relative to the real current date because views use the wall
clock; rooms without a weekend rate keep totals independent of weekday.
Run with: pytest tests/test_booking_api.py -v
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from bookings import models as orm


def day(offset: int) -> str:
    return (timezone.localdate() + timedelta(days=offset)).isoformat()


@pytest.fixture(autouse=True)
def email_notifier(settings):
    settings.BOOKINGS = {
        "NOTIFIER": "bookings.notifications.EmailNotifier",
        "NOTIFICATION_SENDER": "desk@resort.example",
    }


@pytest.fixture
def suite() -> orm.Room:
    return orm.Room.objects.create(
        name="Alpine Retreat Suite",
        category="SUITE",
        weekday_price=Decimal("320.00"),
        capacity=2,
    )


@pytest.fixture
def villa() -> orm.Room:
    return orm.Room.objects.create(
        name="Royal Palms Resort Villa",
        category="RESORT_VILLA",
        weekday_price=Decimal("150.00"),
        capacity=8,
    )


@pytest.fixture
def quote_only() -> orm.Room:
    return orm.Room.objects.create(
        name="Private Island Chalet",
        category="CHALET",
        weekday_price=Decimal("900.00"),
        capacity=2,
        manual_pricing=True,
    )


def booking_payload(room: orm.Room, **overrides) -> dict:
    payload = {
        "room_id": str(room.id),
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "check_in": day(10),
        "check_out": day(13),
        "guests": 2,
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
class TestRooms:
    """Tests for GET /api/rooms and /api/rooms/{id}"""

    def test_list_rooms(self, api_client: APIClient, suite, villa):
        """Given rooms exist, returns the catalog."""
        response = api_client.get("/api/rooms")
        assert response.status_code == 200
        names = [room["name"] for room in response.json()["results"]]
        assert names == ["Alpine Retreat Suite", "Royal Palms Resort Villa"]

    def test_get_room(self, api_client: APIClient, villa):
        """Room detail exposes pricing configuration."""
        body = api_client.get(f"/api/rooms/{villa.id}").json()
        assert body["category"] == "RESORT_VILLA"
        assert body["per_head"] is True
        assert body["weekday_price"] == "150.00"
        assert body["weekend_price"] is None

    def test_get_room_not_found(self, api_client: APIClient):
        """Given room does not exist, returns 404."""
        response = api_client.get("/api/rooms/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404
        assert response.json()["code"] == "ROOM_NOT_FOUND"

    def test_get_room_invalid_id_format(self, api_client: APIClient):
        """Given invalid UUID, returns 400."""
        response = api_client.get("/api/rooms/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ROOM_ID"

    def test_prices_are_decimal_strings(self, api_client: APIClient):
        """Weekday and weekend prices share one representation."""
        chalet = orm.Room.objects.create(
            name="Oceanview Paradise Chalet",
            category="CHALET",
            weekday_price=Decimal("450"),
            weekend_price=Decimal("550.5"),
            capacity=2,
            amenities=["Ocean View", "Private Pool"],
        )
        body = api_client.get(f"/api/rooms/{chalet.id}").json()
        assert body["weekday_price"] == "450.00"
        assert body["weekend_price"] == "550.50"
        assert body["amenities"] == ["Ocean View", "Private Pool"]

    def test_filter_by_category(self, api_client: APIClient, suite, villa):
        response = api_client.get("/api/rooms", {"category": "RESORT_VILLA"})
        assert [room["name"] for room in response.json()["results"]] == ["Royal Palms Resort Villa"]

    def test_filter_by_text(self, api_client: APIClient, suite, villa):
        """q searches names and descriptions."""
        villa.description = "Three bedrooms and a heated courtyard pool."
        villa.save()
        response = api_client.get("/api/rooms", {"q": "courtyard"})
        assert [room["name"] for room in response.json()["results"]] == ["Royal Palms Resort Villa"]
        response = api_client.get("/api/rooms", {"q": "alpine"})
        assert [room["name"] for room in response.json()["results"]] == ["Alpine Retreat Suite"]

    def test_filter_unknown_category(self, api_client: APIClient, suite):
        response = api_client.get("/api/rooms", {"category": "castle"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_CATEGORY"

    def test_filtered_list_does_not_replace_cached_catalog(self, api_client: APIClient, suite, villa):
        api_client.get("/api/rooms", {"category": "SUITE"})
        names = [room["name"] for room in api_client.get("/api/rooms").json()["results"]]
        assert names == ["Alpine Retreat Suite", "Royal Palms Resort Villa"]


@pytest.mark.django_db
class TestAvailability:
    """Tests for GET /api/rooms/{id}/availability"""

    def test_free_room(self, api_client: APIClient, suite):
        """A room with no bookings is available."""
        response = api_client.get(
            f"/api/rooms/{suite.id}/availability",
            {"check_in": day(5), "check_out": day(7)},
        )
        assert response.status_code == 200
        assert response.json()["available"] is True

    def test_overlap(self, api_client: APIClient, suite):
        """An overlapping booking makes the room unavailable."""
        created = api_client.post("/api/bookings", booking_payload(suite), format="json").json()
        body = api_client.get(
            f"/api/rooms/{suite.id}/availability",
            {"check_in": day(12), "check_out": day(15)},
        ).json()
        assert body["available"] is False
        assert body["reason"] == "ALREADY_BOOKED"
        assert body["conflicting"] == [created["id"]]

    def test_past_dates(self, api_client: APIClient, suite):
        """Past check-in dates are reported, not raised."""
        body = api_client.get(
            f"/api/rooms/{suite.id}/availability",
            {"check_in": day(-3), "check_out": day(1)},
        ).json()
        assert body == {
            "room_id": str(suite.id),
            "check_in": day(-3),
            "check_out": day(1),
            "available": False,
            "reason": "CHECK_IN_IN_PAST",
            "conflicting": [],
        }

    def test_missing_dates(self, api_client: APIClient, suite):
        """Malformed queries return 400."""
        response = api_client.get(f"/api/rooms/{suite.id}/availability", {"check_in": day(1)})
        assert response.status_code == 400


@pytest.mark.django_db
class TestQuote:
    """Tests for GET /api/rooms/{id}/quote"""

    def test_per_head_quote(self, api_client: APIClient, villa):
        """2 nights for 2 adults and 1 kid at 150 per head."""
        response = api_client.get(
            f"/api/rooms/{villa.id}/quote",
            {"check_in": day(3), "check_out": day(5), "adults": 2, "kids": 1},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == "900.00"
        assert body["base_total"] == "300.00"
        assert body["guests"] == 3
        assert len(body["nightly_rates"]) == 2

    def test_quote_requires_party(self, api_client: APIClient, suite):
        """Either guests or adults must be given."""
        response = api_client.get(
            f"/api/rooms/{suite.id}/quote", {"check_in": day(3), "check_out": day(5)}
        )
        assert response.status_code == 400

    def test_quote_inverted_range(self, api_client: APIClient, suite):
        """Inverted ranges return INVALID_DATE_RANGE."""
        response = api_client.get(
            f"/api/rooms/{suite.id}/quote",
            {"check_in": day(5), "check_out": day(3), "guests": 1},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_DATE_RANGE"


@pytest.mark.django_db
class TestCreateBooking:
    """Tests for POST /api/bookings"""

    def test_create_booking(self, api_client: APIClient, suite):
        """A valid request creates a PENDING booking."""
        response = api_client.post("/api/bookings", booking_payload(suite), format="json")
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["total_price"] == "960.00"
        assert body["nights"] == 3
        assert orm.Booking.objects.filter(pk=body["id"]).exists()

    def test_overlapping_request_conflicts(self, api_client: APIClient, suite):
        """A second overlapping request returns 409 UNAVAILABLE."""
        api_client.post("/api/bookings", booking_payload(suite), format="json")
        response = api_client.post(
            "/api/bookings",
            booking_payload(suite, check_in=day(11), check_out=day(14)),
            format="json",
        )
        assert response.status_code == 409
        assert response.json()["code"] == "UNAVAILABLE"

    def test_past_check_in(self, api_client: APIClient, suite):
        """Retroactive requests return INVALID_DATE_RANGE."""
        response = api_client.post(
            "/api/bookings",
            booking_payload(suite, check_in=day(-1), check_out=day(2)),
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_DATE_RANGE"

    def test_over_capacity(self, api_client: APIClient, suite):
        """Parties larger than the room are refused."""
        response = api_client.post(
            "/api/bookings", booking_payload(suite, guests=3), format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "CAPACITY_EXCEEDED"

    def test_unknown_room(self, api_client: APIClient, suite):
        """Unknown rooms return 404."""
        payload = booking_payload(suite, room_id="00000000-0000-0000-0000-000000000000")
        response = api_client.post("/api/bookings", payload, format="json")
        assert response.status_code == 404

    def test_invalid_email(self, api_client: APIClient, suite):
        """Field validation errors return 400."""
        response = api_client.post(
            "/api/bookings", booking_payload(suite, email="nope"), format="json"
        )
        assert response.status_code == 400
        assert "email" in response.json()


@pytest.mark.django_db
class TestBookingStatus:
    """Tests for POST /api/bookings/{id}/status"""

    def create(self, api_client: APIClient, room: orm.Room) -> dict:
        return api_client.post("/api/bookings", booking_payload(room), format="json").json()

    def test_confirm_sends_email(self, api_client: APIClient, suite, mailoutbox):
        """Confirming notifies the guest by e-mail."""
        booking = self.create(api_client, suite)
        response = api_client.post(
            f"/api/bookings/{booking['id']}/status", {"status": "CONFIRMED"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["status"] == "CONFIRMED"
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ["alice@example.com"]

    def test_full_lifecycle(self, api_client: APIClient, suite):
        """PENDING -> CONFIRMED -> CHECKED_IN -> CHECKED_OUT."""
        booking = self.create(api_client, suite)
        for target in ("CONFIRMED", "CHECKED_IN", "CHECKED_OUT"):
            response = api_client.post(
                f"/api/bookings/{booking['id']}/status", {"status": target}, format="json"
            )
            assert response.status_code == 200
        assert orm.Booking.objects.get(pk=booking["id"]).status == "CHECKED_OUT"

    def test_skip_is_rejected(self, api_client: APIClient, suite):
        """PENDING -> CHECKED_IN returns 409 INVALID_TRANSITION."""
        booking = self.create(api_client, suite)
        response = api_client.post(
            f"/api/bookings/{booking['id']}/status", {"status": "CHECKED_IN"}, format="json"
        )
        assert response.status_code == 409
        assert response.json()["code"] == "INVALID_TRANSITION"
        assert orm.Booking.objects.get(pk=booking["id"]).status == "PENDING"

    def test_cancel_checked_out_is_rejected(self, api_client: APIClient, suite):
        """Terminal bookings cannot be cancelled."""
        booking = self.create(api_client, suite)
        orm.Booking.objects.filter(pk=booking["id"]).update(status="CHECKED_OUT")
        response = api_client.post(
            f"/api/bookings/{booking['id']}/status", {"status": "CANCELLED"}, format="json"
        )
        assert response.status_code == 409

    def test_quote_only_booking_needs_final_price(self, api_client: APIClient, quote_only):
        """Manual-pricing bookings are confirmed with a staff price."""
        booking = self.create(api_client, quote_only)
        assert booking["price_is_estimate"] is True

        url = f"/api/bookings/{booking['id']}/status"
        rejected = api_client.post(url, {"status": "CONFIRMED"}, format="json")
        assert rejected.status_code == 400
        assert rejected.json()["code"] == "MANUAL_QUOTE_REQUIRED"

        accepted = api_client.post(
            url, {"status": "CONFIRMED", "final_price": "2500.00"}, format="json"
        )
        assert accepted.status_code == 200
        assert accepted.json()["total_price"] == "2500.00"
        assert accepted.json()["price_is_estimate"] is False

    def test_unknown_status(self, api_client: APIClient, suite):
        """Unknown status names are field errors."""
        booking = self.create(api_client, suite)
        response = api_client.post(
            f"/api/bookings/{booking['id']}/status", {"status": "ARCHIVED"}, format="json"
        )
        assert response.status_code == 400

    def test_booking_not_found(self, api_client: APIClient):
        """Unknown bookings return 404."""
        response = api_client.post(
            "/api/bookings/00000000-0000-0000-0000-000000000000/status",
            {"status": "CONFIRMED"},
            format="json",
        )
        assert response.status_code == 404
        assert response.json()["code"] == "BOOKING_NOT_FOUND"


@pytest.mark.django_db
class TestBookingQueries:
    """Tests for GET /api/bookings, /api/bookings/summary and /api/bookings/{id}"""

    def test_list_and_filter(self, api_client: APIClient, suite, villa):
        """Bookings are listed and filterable by status."""
        first = api_client.post("/api/bookings", booking_payload(suite), format="json").json()
        api_client.post("/api/bookings", booking_payload(villa), format="json")
        api_client.post(
            f"/api/bookings/{first['id']}/status", {"status": "CANCELLED"}, format="json"
        )

        everything = api_client.get("/api/bookings").json()["results"]
        cancelled = api_client.get("/api/bookings", {"status": "CANCELLED"}).json()["results"]
        assert len(everything) == 2
        assert [b["id"] for b in cancelled] == [first["id"]]

    def test_list_unknown_status(self, api_client: APIClient):
        """Unknown status filters return 400."""
        response = api_client.get("/api/bookings", {"status": "LOST"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_STATUS"

    def test_summary(self, api_client: APIClient, suite):
        """The summary counts bookings per status."""
        api_client.post("/api/bookings", booking_payload(suite), format="json")
        body = api_client.get("/api/bookings/summary").json()
        assert body["PENDING"] == 1
        assert body["CONFIRMED"] == 0

    def test_detail(self, api_client: APIClient, suite):
        """A booking can be fetched by id."""
        created = api_client.post("/api/bookings", booking_payload(suite), format="json").json()
        body = api_client.get(f"/api/bookings/{created['id']}").json()
        assert body == created

    def test_detail_invalid_id(self, api_client: APIClient):
        """Malformed ids return 400."""
        response = api_client.get("/api/bookings/b1")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_BOOKING_ID"
