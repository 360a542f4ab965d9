"""Booking ledger - owns booking status and vehicle availability.

Nothing else in the codebase writes Booking.status or Vehicle.available.

State machine:
    pending -> confirmed   (payment succeeded, vehicle stays unavailable)
    pending -> cancelled   (payment failed or abandoned, vehicle released)

Both target states are terminal.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import date, datetime, timezone

from rentals.domain import (
    Booking,
    BookingId,
    BookingStatus,
    BookingWithVehicle,
    PricingPolicy,
    Vehicle,
    VehicleId,
)
from rentals.domain.errors import (
    BookingNotFoundError,
    InvalidTransitionError,
    VehicleNotFoundError,
    VehicleUnavailableError,
)
from rentals.stores.interfaces import BookingStore, VehicleStore

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookingLedger:
    """Creates bookings and moves them through their lifecycle."""

    def __init__(
        self,
        vehicles: VehicleStore,
        bookings: BookingStore,
        pricing: PricingPolicy | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._vehicles = vehicles
        self._bookings = bookings
        self._pricing = pricing or PricingPolicy()
        self._clock = clock

    def reserve(
        self,
        user_id: int,
        vehicle_id: VehicleId,
        start_date: date,
        end_date: date,
        with_driver: bool,
    ) -> Booking:
        """Create a pending booking and mark the vehicle unavailable.

        The vehicle claim and the booking insert are one atomic unit. The
        claim is a compare-and-swap on the availability flag, so of several
        concurrent callers for the same vehicle exactly one succeeds.

        Raises:
            VehicleNotFoundError: If the vehicle does not exist.
            VehicleUnavailableError: If the vehicle is held by another booking.
            InvalidDateRangeError: If end_date is before start_date.
            InvalidRateError: If the vehicle has no positive daily rate.
        """
        vehicle = self._vehicles.get_vehicle(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError()
        if not vehicle.available:
            raise VehicleUnavailableError()

        quote = self._pricing.quote(
            vehicle.rate_per_day.amount, start_date, end_date, with_driver
        )
        booking = Booking(
            id=BookingId(uuid.uuid4()),
            user_id=user_id,
            vehicle_id=vehicle_id,
            start_date=start_date,
            end_date=end_date,
            with_driver=with_driver,
            total_price=quote.total,
            status=BookingStatus.PENDING,
            created_at=self._clock(),
        )

        with self._bookings.atomic():
            if not self._vehicles.claim(vehicle_id):
                logger.info("Lost reservation race for vehicle %s", vehicle_id)
                raise VehicleUnavailableError()
            created = self._bookings.add(booking)
            if created is None:
                raise VehicleUnavailableError()

        logger.info(
            "Reserved vehicle %s for user %s as booking %s (%s)",
            vehicle_id,
            user_id,
            created.id,
            created.total_price,
        )
        return created

    def confirm(
        self, booking_id: BookingId, payment_reference: str | None = None
    ) -> Booking:
        """Mark a pending booking as paid.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            InvalidTransitionError: If the booking is not pending.
        """
        with self._bookings.atomic():
            booking = self._transition(
                booking_id, BookingStatus.CONFIRMED, payment_reference
            )
        logger.info("Confirmed booking %s (payment %s)", booking_id, payment_reference)
        return booking

    def cancel(self, booking_id: BookingId) -> Booking:
        """Cancel a pending booking and release its vehicle.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            InvalidTransitionError: If the booking is not pending.
        """
        with self._bookings.atomic():
            booking = self._transition(booking_id, BookingStatus.CANCELLED)
            self._vehicles.set_availability(booking.vehicle_id, True)
        logger.info(
            "Cancelled booking %s, released vehicle %s", booking_id, booking.vehicle_id
        )
        return booking

    def cancel_stale(self, older_than: datetime) -> list[Booking]:
        """Cancel every pending booking created before older_than.

        A booking confirmed by a payment callback while the sweep runs keeps
        its confirmation; the sweep skips it.
        """
        cancelled = []
        for booking in self._bookings.list_pending_before(older_than):
            try:
                cancelled.append(self.cancel(booking.id))
            except InvalidTransitionError:
                logger.info("Booking %s left pending state before sweep", booking.id)
        return cancelled

    def get_by_id(self, booking_id: BookingId) -> Booking:
        """Return a booking by ID.

        Raises:
            BookingNotFoundError: If the booking does not exist.
        """
        booking = self._bookings.get_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError()
        return booking

    def get_by_user(self, user_id: int) -> list[Booking]:
        return self._bookings.list_for_user(user_id)

    def get_history(self, user_id: int) -> list[BookingWithVehicle]:
        """Return the user's bookings, newest first, each with its vehicle."""
        vehicles: dict[VehicleId, Vehicle | None] = {}
        history = []
        for booking in self.get_by_user(user_id):
            if booking.vehicle_id not in vehicles:
                vehicles[booking.vehicle_id] = self._vehicles.get_vehicle(booking.vehicle_id)
            history.append(BookingWithVehicle(booking, vehicles[booking.vehicle_id]))
        return history

    def _transition(
        self,
        booking_id: BookingId,
        target: BookingStatus,
        payment_reference: str | None = None,
    ) -> Booking:
        current = self.get_by_id(booking_id)
        if not current.can_transition_to(target):
            raise InvalidTransitionError(current.status.value, target.value)

        updated = self._bookings.update_status(
            booking_id, current.status, target, payment_reference
        )
        if updated is None:
            # another writer moved it between the read and the update
            latest = self.get_by_id(booking_id)
            logger.warning(
                "Booking %s changed to %s before %s could be applied",
                booking_id,
                latest.status.value,
                target.value,
            )
            raise InvalidTransitionError(latest.status.value, target.value)
        return updated
