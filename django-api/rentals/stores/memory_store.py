"""In-process stores backed by dictionaries.

Used by unit tests and local experiments. Both stores share one re-entrant
lock so that BookingStore.atomic() serialises the vehicle claim together with
the booking insert.
"""

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime

from rentals.domain import Booking, BookingId, BookingStatus, Vehicle, VehicleId, VehicleType
from rentals.stores.interfaces import BookingStore, VehicleStore


class InMemoryVehicleStore(VehicleStore):
    """Vehicle catalog held in a dict.

    Exposes its lock so a booking store can share it.
    """

    def __init__(
        self, vehicles: Iterable[Vehicle] = (), lock: "threading.RLock | None" = None
    ) -> None:
        self.lock = lock or threading.RLock()
        self._vehicles: dict[VehicleId, Vehicle] = {v.id: v for v in vehicles}

    def snapshot(self) -> dict[VehicleId, Vehicle]:
        with self.lock:
            return dict(self._vehicles)

    def restore(self, snapshot: dict[VehicleId, Vehicle]) -> None:
        with self.lock:
            self._vehicles = snapshot

    def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        with self.lock:
            self._vehicles[vehicle.id] = vehicle
        return vehicle

    def list_vehicles(self, vehicle_type: VehicleType | None = None) -> list[Vehicle]:
        with self.lock:
            vehicles = list(self._vehicles.values())
        if vehicle_type is not None:
            vehicles = [v for v in vehicles if v.type == vehicle_type]
        return sorted(vehicles, key=lambda v: v.name)

    def get_vehicle(self, vehicle_id: VehicleId) -> Vehicle | None:
        with self.lock:
            return self._vehicles.get(vehicle_id)

    def claim(self, vehicle_id: VehicleId) -> bool:
        with self.lock:
            vehicle = self._vehicles.get(vehicle_id)
            if vehicle is None or not vehicle.available:
                return False
            self._vehicles[vehicle_id] = replace(vehicle, available=False)
            return True

    def set_availability(self, vehicle_id: VehicleId, available: bool) -> Vehicle | None:
        with self.lock:
            vehicle = self._vehicles.get(vehicle_id)
            if vehicle is None:
                return None
            updated = replace(vehicle, available=available)
            self._vehicles[vehicle_id] = updated
            return updated


class InMemoryBookingStore(BookingStore):
    """Booking storage held in a dict, locked together with its vehicle store."""

    def __init__(self, vehicles: InMemoryVehicleStore) -> None:
        self._lock = vehicles.lock
        self._bookings: dict[BookingId, Booking] = {}
        self._snapshot: dict[BookingId, Booking] | None = None
        self._vehicles = vehicles

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            if self._snapshot is not None:
                # nested block joins the outer unit
                yield
                return
            self._snapshot = dict(self._bookings)
            vehicles = self._vehicles.snapshot()
            try:
                yield
            except BaseException:
                self._bookings = self._snapshot
                self._vehicles.restore(vehicles)
                raise
            finally:
                self._snapshot = None

    def add(self, booking: Booking) -> Booking | None:
        with self._lock:
            if any(
                b.vehicle_id == booking.vehicle_id and b.status.is_active
                for b in self._bookings.values()
            ):
                return None
            self._bookings[booking.id] = booking
            return booking

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        with self._lock:
            return self._bookings.get(booking_id)

    def list_for_user(self, user_id: int) -> list[Booking]:
        with self._lock:
            bookings = [b for b in self._bookings.values() if b.user_id == user_id]
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def list_pending_before(self, cutoff: datetime) -> list[Booking]:
        with self._lock:
            stale = [
                b
                for b in self._bookings.values()
                if b.status is BookingStatus.PENDING and b.created_at < cutoff
            ]
        return sorted(stale, key=lambda b: b.created_at)

    def update_status(
        self,
        booking_id: BookingId,
        expected: BookingStatus,
        status: BookingStatus,
        payment_reference: str | None = None,
    ) -> Booking | None:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None or booking.status is not expected:
                return None
            updated = booking.with_status(status, payment_reference)
            self._bookings[booking_id] = updated
            return updated
