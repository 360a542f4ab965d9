"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in rentals/models.py (persistence layer).
"""

from dataclasses import dataclass, replace
from datetime import date, datetime

from rentals.domain.value_objects import (
    BookingId,
    BookingStatus,
    Money,
    VehicleId,
    VehicleType,
)

# pending is the only non-terminal status.
ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class Vehicle:
    """Domain representation of a rentable Vehicle."""

    id: VehicleId
    name: str
    type: VehicleType
    category: str
    description: str
    rate_per_day: Money
    available: bool
    image_url: str | None = None
    features: tuple[str, ...] = ()


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    user_id: int
    vehicle_id: VehicleId
    start_date: date
    end_date: date
    with_driver: bool
    total_price: Money
    status: BookingStatus
    created_at: datetime
    payment_reference: str | None = None

    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def with_status(
        self, status: BookingStatus, payment_reference: str | None = None
    ) -> "Booking":
        if payment_reference is None:
            payment_reference = self.payment_reference
        return replace(self, status=status, payment_reference=payment_reference)


@dataclass(frozen=True)
class BookingWithVehicle:
    """A booking paired with its vehicle, for booking history views."""

    booking: Booking
    vehicle: Vehicle | None
