"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in bookings/domain/.
"""

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from bookings.domain.models import BookingStatus, RoomCategory

CATEGORY_CHOICES = [(category.value, category.label) for category in RoomCategory]
STATUS_CHOICES = [(status.value, status.label) for status in BookingStatus]


class Room(models.Model):
    """Persistence model for rooms."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES)
    description = models.TextField(blank=True)
    weekday_price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))]
    )
    weekend_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
        validators=[MinValueValidator(Decimal("0"))],
    )
    capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    manual_pricing = models.BooleanField(default=False)
    amenities = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Booking(models.Model):
    """Persistence model for bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name="bookings")
    guest_name = models.CharField(max_length=255)
    guest_email = models.EmailField()
    guest_phone = models.CharField(max_length=32, blank=True, null=True)
    check_in = models.DateField()
    check_out = models.DateField()
    adults = models.PositiveIntegerField(default=1)
    kids = models.PositiveIntegerField(default=0)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    price_is_estimate = models.BooleanField(default=False)
    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=BookingStatus.PENDING.value
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["room", "check_in", "check_out"], name="booking_room_stay_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_in__lt=models.F("check_out")),
                name="booking_check_in_before_check_out",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.guest_name} - {self.room.name} ({self.check_in} to {self.check_out})"
