"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. They hold no business
rules: conflicts are reported by returning None or False, and the services
decide which domain error that means.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime

from rentals.domain import Booking, BookingId, BookingStatus, Vehicle, VehicleId, VehicleType


class VehicleStore(ABC):
    """Interface for the vehicle catalog."""

    @abstractmethod
    def list_vehicles(self, vehicle_type: VehicleType | None = None) -> list[Vehicle]:
        """Return all vehicles, or only those of vehicle_type, ordered by name."""
        ...

    @abstractmethod
    def get_vehicle(self, vehicle_id: VehicleId) -> Vehicle | None:
        """Return a vehicle by ID, or None if not found."""
        ...

    @abstractmethod
    def claim(self, vehicle_id: VehicleId) -> bool:
        """Flip available from True to False.

        Returns False if the vehicle was already unavailable or does not exist.
        Must be a single conditional write (compare-and-swap).
        """
        ...

    @abstractmethod
    def set_availability(self, vehicle_id: VehicleId, available: bool) -> Vehicle | None:
        """Set the availability flag and return the updated vehicle, or None."""
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Context manager grouping vehicle and booking writes into one unit.

        Everything written inside the block is applied together or not at all.
        """
        ...

    @abstractmethod
    def add(self, booking: Booking) -> Booking | None:
        """Insert a new booking.

        Returns None if the vehicle already has an active booking.
        """
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        """Return a booking by ID, or None if not found."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[Booking]:
        """Return a user's bookings ordered by created_at descending."""
        ...

    @abstractmethod
    def list_pending_before(self, cutoff: datetime) -> list[Booking]:
        """Return pending bookings created before cutoff, oldest first."""
        ...

    @abstractmethod
    def update_status(
        self,
        booking_id: BookingId,
        expected: BookingStatus,
        status: BookingStatus,
        payment_reference: str | None = None,
    ) -> Booking | None:
        """Move a booking from expected to status.

        Returns None if the booking is missing or no longer in expected.
        """
        ...
