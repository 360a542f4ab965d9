"""Booking service - all booking business logic lives here.

Services:
- Depend only on interfaces (stores, payment adapter)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta

from rentals.domain import Booking, BookingStatus, BookingWithVehicle
from rentals.domain.errors import (
    BookingAccessDeniedError,
    InvalidTransitionError,
    PaymentAdapterFailureError,
)
from rentals.payments.interfaces import PaymentAdapter, PaymentAdapterError, PaymentSession
from rentals.services.booking_ledger import BookingLedger, utcnow
from rentals.services.parsing import parse_booking_id, parse_vehicle_id

logger = logging.getLogger(__name__)


class BookingService:
    """Service coordinating reservations, payments and the booking ledger."""

    def __init__(
        self,
        ledger: BookingLedger,
        payments: PaymentAdapter,
        currency: str = "usd",
        pending_ttl: timedelta = timedelta(minutes=30),
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._ledger = ledger
        self._payments = payments
        self._currency = currency
        self._pending_ttl = pending_ttl
        self._clock = clock

    def create_booking(
        self,
        user_id: int,
        vehicle_id: str,
        start_date: date,
        end_date: date,
        with_driver: bool,
    ) -> Booking:
        """Reserve a vehicle for the caller. The booking starts pending.

        Raises:
            InvalidVehicleIdError: If the vehicle_id is not a valid UUID.
            VehicleNotFoundError: If the vehicle does not exist.
            VehicleUnavailableError: If the vehicle is already booked.
            InvalidDateRangeError: If end_date is before start_date.
        """
        return self._ledger.reserve(
            user_id, parse_vehicle_id(vehicle_id), start_date, end_date, with_driver
        )

    def list_bookings(self, user_id: int) -> list[Booking]:
        """Return the caller's bookings, newest first."""
        return self._ledger.get_by_user(user_id)

    def list_booking_history(self, user_id: int) -> list[BookingWithVehicle]:
        """Return the caller's bookings, newest first, with their vehicles."""
        return self._ledger.get_history(user_id)

    def get_booking(self, user_id: int, booking_id: str) -> Booking:
        """Return a booking owned by the caller.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
            BookingAccessDeniedError: If another user owns the booking.
        """
        booking = self._ledger.get_by_id(parse_booking_id(booking_id))
        if booking.user_id != user_id:
            raise BookingAccessDeniedError()
        return booking

    def cancel_booking(self, user_id: int, booking_id: str) -> Booking:
        """Cancel one of the caller's pending bookings."""
        booking = self.get_booking(user_id, booking_id)
        return self._ledger.cancel(booking.id)

    def start_payment(self, user_id: int, booking_id: str) -> PaymentSession:
        """Open a payment session for one of the caller's pending bookings.

        Raises:
            InvalidTransitionError: If the booking is no longer pending.
            PaymentAdapterFailureError: If the provider rejects the request.
        """
        booking = self.get_booking(user_id, booking_id)
        if booking.status is not BookingStatus.PENDING:
            raise InvalidTransitionError(
                booking.status.value, BookingStatus.CONFIRMED.value
            )
        try:
            return self._payments.create_payment_session(
                booking.total_price, self._currency, str(booking.id)
            )
        except PaymentAdapterError as exc:
            logger.error("Payment session for booking %s failed: %s", booking.id, exc)
            raise PaymentAdapterFailureError() from exc

    def handle_payment_outcome(
        self, booking_id: str, success: bool, payment_reference: str | None = None
    ) -> Booking:
        """Apply a payment callback to its booking.

        Success confirms the booking, failure cancels it and releases the
        vehicle. Providers retry callbacks, so an outcome the booking already
        reflects is acknowledged without change.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            InvalidTransitionError: If the outcome contradicts a terminal state,
                e.g. a success arriving after the booking expired.
        """
        parsed_id = parse_booking_id(booking_id)
        target = BookingStatus.CONFIRMED if success else BookingStatus.CANCELLED

        booking = self._ledger.get_by_id(parsed_id)
        if booking.status is target:
            logger.info(
                "Duplicate %s callback for booking %s ignored", target.value, parsed_id
            )
            return booking

        try:
            if success:
                return self._ledger.confirm(parsed_id, payment_reference)
            return self._ledger.cancel(parsed_id)
        except InvalidTransitionError:
            latest = self._ledger.get_by_id(parsed_id)
            if latest.status is target:
                return latest
            logger.warning(
                "Payment %s for booking %s arrived after it was %s",
                "success" if success else "failure",
                parsed_id,
                latest.status.value,
            )
            raise

    def expire_stale_bookings(
        self, now: datetime | None = None, ttl: timedelta | None = None
    ) -> list[Booking]:
        """Cancel pending bookings older than the payment window.

        ttl defaults to the window the service was configured with.
        """
        window = self._pending_ttl if ttl is None else ttl
        cutoff = (now or self._clock()) - window
        expired = self._ledger.cancel_stale(cutoff)
        if expired:
            logger.info("Expired %d pending bookings older than %s", len(expired), cutoff)
        return expired
