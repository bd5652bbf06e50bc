"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.bootstrap import build_booking_service
from bookings.cache import ROOM_LIST_KEY, room_detail_key
from bookings.conf import booking_setting
from bookings.domain import ContactInfo, DateRange, Money, PartySize, RoomId
from bookings.domain.errors import DomainError, ErrorCode, InvalidRoomIdError
from bookings.handlers.serializers import (
    AvailabilitySerializer,
    BookingSerializer,
    CreateBookingSerializer,
    PriceQuoteSerializer,
    QuoteQuerySerializer,
    RoomSerializer,
    StaySerializer,
    TransitionSerializer,
)

ERROR_STATUS = {
    ErrorCode.ROOM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_ROOM_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_BOOKING_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DATE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_STATUS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CATEGORY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MANUAL_QUOTE_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.BOOKING_CONFLICT: status.HTTP_409_CONFLICT,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS[error.code],
    )


def invalid_input(message: str) -> Response:
    return Response(
        {"code": "INVALID_INPUT", "message": message},
        status=status.HTTP_400_BAD_REQUEST,
    )


def party_from(data: dict) -> PartySize:
    if data.get("guests") is not None:
        return PartySize.of_guests(data["guests"])
    return PartySize(adults=data["adults"], kids=data.get("kids", 0))


def stay_from(data: dict) -> DateRange:
    return DateRange(check_in=data["check_in"], check_out=data["check_out"])


class RoomListView(APIView):
    """Handler for GET /api/rooms?category=&q="""

    def get(self, request: Request) -> Response:
        category = request.query_params.get("category")
        query = request.query_params.get("q")
        # Only the unfiltered catalog is cached.
        filtered = bool(category or query)
        data = None if filtered else cache.get(ROOM_LIST_KEY)
        if data is None:
            try:
                rooms = build_booking_service().list_rooms(category=category, query=query)
            except DomainError as exc:
                return error_response(exc)
            data = RoomSerializer(rooms, many=True).data
            if not filtered:
                cache.set(ROOM_LIST_KEY, data, booking_setting("ROOM_CACHE_TIMEOUT"))
        return Response({"results": data})


class RoomDetailView(APIView):
    """Handler for GET /api/rooms/{room_id}"""

    def get(self, request: Request, room_id: str) -> Response:
        # Key on the canonical UUID so signal invalidation reaches every spelling.
        try:
            key = room_detail_key(str(RoomId.from_string(room_id)))
        except ValueError:
            return error_response(InvalidRoomIdError())
        data = cache.get(key)
        if data is None:
            try:
                room = build_booking_service().get_room(room_id)
            except DomainError as exc:
                return error_response(exc)
            data = RoomSerializer(room).data
            cache.set(key, data, booking_setting("ROOM_CACHE_TIMEOUT"))
        return Response(data)


class AvailabilityView(APIView):
    """Handler for GET /api/rooms/{room_id}/availability"""

    def get(self, request: Request, room_id: str) -> Response:
        query = StaySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            result = build_booking_service().check_availability(
                room_id, stay_from(query.validated_data)
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(AvailabilitySerializer(result).data)


class QuoteView(APIView):
    """Handler for GET /api/rooms/{room_id}/quote"""

    def get(self, request: Request, room_id: str) -> Response:
        query = QuoteQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            quote = build_booking_service().quote(
                room_id, stay_from(query.validated_data), party_from(query.validated_data)
            )
        except DomainError as exc:
            return error_response(exc)
        except ValueError as exc:
            return invalid_input(str(exc))
        return Response(PriceQuoteSerializer(quote).data)


class BookingListView(APIView):
    """Handler for GET/POST /api/bookings"""

    def get(self, request: Request) -> Response:
        try:
            bookings = build_booking_service().list_bookings(request.query_params.get("status"))
        except DomainError as exc:
            return error_response(exc)
        return Response({"results": BookingSerializer(bookings, many=True).data})

    def post(self, request: Request) -> Response:
        body = CreateBookingSerializer(data=request.data)
        if not body.is_valid():
            return Response(body.errors, status=status.HTTP_400_BAD_REQUEST)
        data = body.validated_data
        try:
            contact = ContactInfo(
                name=data["name"], email=data["email"], phone=data.get("phone") or None
            )
            booking = build_booking_service().create_booking(
                data["room_id"], stay_from(data), party_from(data), contact
            )
        except DomainError as exc:
            return error_response(exc)
        except ValueError as exc:
            return invalid_input(str(exc))
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class BookingSummaryView(APIView):
    """Handler for GET /api/bookings/summary"""

    def get(self, request: Request) -> Response:
        counts = build_booking_service().summarize_bookings()
        return Response({booking_status.value: total for booking_status, total in counts.items()})


class BookingDetailView(APIView):
    """Handler for GET /api/bookings/{booking_id}"""

    def get(self, request: Request, booking_id: str) -> Response:
        try:
            booking = build_booking_service().get_booking(booking_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(BookingSerializer(booking).data)


class BookingStatusView(APIView):
    """Handler for POST /api/bookings/{booking_id}/status"""

    def post(self, request: Request, booking_id: str) -> Response:
        body = TransitionSerializer(data=request.data)
        if not body.is_valid():
            return Response(body.errors, status=status.HTTP_400_BAD_REQUEST)
        final_price = body.validated_data.get("final_price")
        try:
            booking = build_booking_service().transition_booking(
                booking_id,
                body.validated_data["status"],
                final_price=Money(amount=final_price) if final_price is not None else None,
            )
        except DomainError as exc:
            return error_response(exc)
        except ValueError as exc:
            return invalid_input(str(exc))
        return Response(BookingSerializer(booking).data)
