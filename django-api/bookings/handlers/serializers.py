"""Serializers for parsing requests and rendering domain models."""

from rest_framework import serializers

from bookings.domain import BookingStatus


class StaySerializer(serializers.Serializer):
    """Query or body fields describing a stay.

    Date order is checked by the domain so inverted ranges surface as
    INVALID_DATE_RANGE rather than a field error.
    """

    check_in = serializers.DateField()
    check_out = serializers.DateField()


class PartySerializer(serializers.Serializer):
    """Either ``guests`` or ``adults`` (+ ``kids``) must be provided."""

    guests = serializers.IntegerField(min_value=1, required=False)
    adults = serializers.IntegerField(min_value=0, required=False)
    kids = serializers.IntegerField(min_value=0, required=False, default=0)

    def validate(self, attrs):
        if attrs.get("guests") is None and attrs.get("adults") is None:
            raise serializers.ValidationError("Provide either guests or adults.")
        if attrs.get("guests") is not None and attrs.get("adults") is not None:
            raise serializers.ValidationError("Provide guests or adults, not both.")
        return attrs


class QuoteQuerySerializer(StaySerializer, PartySerializer):
    pass


class CreateBookingSerializer(StaySerializer, PartySerializer):
    room_id = serializers.CharField()
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)


class TransitionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[status.value for status in BookingStatus])
    final_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )


class RoomSerializer(serializers.Serializer):
    """Serializer for Room domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    category = serializers.CharField(source="category.value")
    description = serializers.CharField()
    weekday_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, source="weekday_price.amount"
    )
    weekend_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, source="weekend_price.amount", allow_null=True
    )
    capacity = serializers.IntegerField(source="capacity.value")
    manual_pricing = serializers.BooleanField()
    per_head = serializers.BooleanField(source="category.is_per_head")
    amenities = serializers.ListField(child=serializers.CharField())


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField(source="id.value")
    room_id = serializers.CharField(source="room_id.value")
    guest_name = serializers.CharField(source="contact.name")
    guest_email = serializers.EmailField(source="contact.email")
    guest_phone = serializers.CharField(source="contact.phone", allow_null=True)
    check_in = serializers.DateField(source="stay.check_in")
    check_out = serializers.DateField(source="stay.check_out")
    nights = serializers.IntegerField(source="stay.night_count")
    adults = serializers.IntegerField(source="party.adults")
    kids = serializers.IntegerField(source="party.kids")
    total_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, source="total_price.amount"
    )
    price_is_estimate = serializers.BooleanField()
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()


class NightlyRateSerializer(serializers.Serializer):
    night = serializers.DateField()
    rate = serializers.DecimalField(max_digits=10, decimal_places=2, source="rate.amount")
    is_weekend = serializers.BooleanField()


class PriceQuoteSerializer(serializers.Serializer):
    """Serializer for PriceQuote."""

    room_id = serializers.CharField(source="room_id.value")
    check_in = serializers.DateField(source="stay.check_in")
    check_out = serializers.DateField(source="stay.check_out")
    guests = serializers.IntegerField(source="party.total")
    nightly_rates = NightlyRateSerializer(many=True)
    base_total = serializers.DecimalField(
        max_digits=12, decimal_places=2, source="base_total.amount"
    )
    total = serializers.DecimalField(max_digits=12, decimal_places=2, source="total.amount")
    per_head = serializers.BooleanField()
    is_estimate = serializers.BooleanField()


class AvailabilitySerializer(serializers.Serializer):
    """Serializer for AvailabilityResult."""

    room_id = serializers.CharField(source="room_id.value")
    check_in = serializers.DateField(source="stay.check_in")
    check_out = serializers.DateField(source="stay.check_out")
    available = serializers.BooleanField()
    reason = serializers.SerializerMethodField()
    conflicting = serializers.SerializerMethodField()

    def get_reason(self, result):
        return result.reason.value if result.reason is not None else None

    def get_conflicting(self, result):
        return [str(booking_id) for booking_id in result.conflicting]
