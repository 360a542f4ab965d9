"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from rentals.domain.value_objects import BookingStatus as DomainBookingStatus
from rentals.domain.value_objects import VehicleType as DomainVehicleType


class VehicleType(models.TextChoices):
    CAR = DomainVehicleType.CAR.value, "Car"
    BIKE = DomainVehicleType.BIKE.value, "Bike"
    BUS = DomainVehicleType.BUS.value, "Bus"


class BookingStatus(models.TextChoices):
    PENDING = DomainBookingStatus.PENDING.value, "Pending"
    CONFIRMED = DomainBookingStatus.CONFIRMED.value, "Confirmed"
    CANCELLED = DomainBookingStatus.CANCELLED.value, "Cancelled"


ACTIVE_STATUSES = [BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value]


class Vehicle(models.Model):
    """Persistence model for rentable vehicles."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=10, choices=VehicleType.choices)
    category = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    rate_per_day = models.DecimalField(max_digits=10, decimal_places=2)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    features = models.JSONField(default=list, blank=True)
    available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["type"], name="vehicle_type_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rate_per_day__gte=0),
                name="vehicle_rate_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Booking(models.Model):
    """Persistence model for bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="bookings"
    )
    vehicle = models.ForeignKey(
        Vehicle, on_delete=models.PROTECT, related_name="bookings"
    )
    start_date = models.DateField()
    end_date = models.DateField()
    with_driver = models.BooleanField(default=False)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(
        max_length=10, choices=BookingStatus.choices, default=BookingStatus.PENDING
    )
    payment_reference = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="booking_user_created_idx"),
            models.Index(fields=["status", "created_at"], name="booking_status_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="booking_end_not_before_start",
            ),
            models.UniqueConstraint(
                fields=["vehicle"],
                condition=models.Q(status__in=ACTIVE_STATUSES),
                name="one_active_booking_per_vehicle",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.vehicle.name} - {self.start_date} ({self.status})"
