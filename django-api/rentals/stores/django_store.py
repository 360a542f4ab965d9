"""Django ORM implementation of the rental stores.

Availability and status changes are conditional UPDATE statements, so the
database decides which of two concurrent writers wins.
"""

import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import ParamSpec, TypeVar

from django.db import IntegrityError, InterfaceError, OperationalError, transaction
from django.utils import timezone

from rentals import models
from rentals.cache import invalidate_catalog_cache
from rentals.domain import (
    Booking,
    BookingId,
    BookingStatus,
    Money,
    Vehicle,
    VehicleId,
    VehicleType,
)
from rentals.domain.errors import StorageUnavailableError
from rentals.stores.interfaces import BookingStore, VehicleStore

P = ParamSpec("P")
R = TypeVar("R")


def translate_connection_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Surface a lost database connection as StorageUnavailableError."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            raise StorageUnavailableError() from exc

    return wrapper


def to_domain_vehicle(row: models.Vehicle) -> Vehicle:
    return Vehicle(
        id=VehicleId(row.id),
        name=row.name,
        type=VehicleType(row.type),
        category=row.category,
        description=row.description,
        rate_per_day=Money(Decimal(row.rate_per_day)),
        available=row.available,
        image_url=row.image_url,
        features=tuple(row.features or ()),
    )


def to_domain_booking(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        user_id=row.user_id,
        vehicle_id=VehicleId(row.vehicle_id),
        start_date=row.start_date,
        end_date=row.end_date,
        with_driver=row.with_driver,
        total_price=Money(Decimal(row.total_price)),
        status=BookingStatus(row.status),
        created_at=row.created_at,
        payment_reference=row.payment_reference,
    )


def _invalidate_on_commit() -> None:
    transaction.on_commit(invalidate_catalog_cache)


class DjangoVehicleStore(VehicleStore):
    """Vehicle catalog backed by the Django ORM."""

    @translate_connection_errors
    def list_vehicles(self, vehicle_type: VehicleType | None = None) -> list[Vehicle]:
        queryset = models.Vehicle.objects.order_by("name")
        if vehicle_type is not None:
            queryset = queryset.filter(type=vehicle_type.value)
        return [to_domain_vehicle(row) for row in queryset]

    @translate_connection_errors
    def get_vehicle(self, vehicle_id: VehicleId) -> Vehicle | None:
        row = models.Vehicle.objects.filter(pk=vehicle_id.value).first()
        return to_domain_vehicle(row) if row is not None else None

    @translate_connection_errors
    def claim(self, vehicle_id: VehicleId) -> bool:
        updated = models.Vehicle.objects.filter(
            pk=vehicle_id.value, available=True
        ).update(available=False, updated_at=timezone.now())
        if updated:
            _invalidate_on_commit()
        return updated == 1

    @translate_connection_errors
    def set_availability(self, vehicle_id: VehicleId, available: bool) -> Vehicle | None:
        updated = models.Vehicle.objects.filter(pk=vehicle_id.value).update(
            available=available, updated_at=timezone.now()
        )
        if not updated:
            return None
        _invalidate_on_commit()
        return self.get_vehicle(vehicle_id)


class DjangoBookingStore(BookingStore):
    """Booking ledger storage backed by the Django ORM."""

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            with transaction.atomic():
                yield
        except (OperationalError, InterfaceError) as exc:
            raise StorageUnavailableError() from exc

    @translate_connection_errors
    def add(self, booking: Booking) -> Booking | None:
        try:
            # savepoint so a constraint violation leaves the outer block usable
            with transaction.atomic():
                row = models.Booking.objects.create(
                    id=booking.id.value,
                    user_id=booking.user_id,
                    vehicle_id=booking.vehicle_id.value,
                    start_date=booking.start_date,
                    end_date=booking.end_date,
                    with_driver=booking.with_driver,
                    total_price=booking.total_price.amount,
                    status=booking.status.value,
                    payment_reference=booking.payment_reference,
                    created_at=booking.created_at,
                )
        except IntegrityError:
            return None
        return to_domain_booking(row)

    @translate_connection_errors
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = models.Booking.objects.filter(pk=booking_id.value).first()
        return to_domain_booking(row) if row is not None else None

    @translate_connection_errors
    def list_for_user(self, user_id: int) -> list[Booking]:
        rows = models.Booking.objects.filter(user_id=user_id).order_by("-created_at")
        return [to_domain_booking(row) for row in rows]

    @translate_connection_errors
    def list_pending_before(self, cutoff: datetime) -> list[Booking]:
        rows = models.Booking.objects.filter(
            status=models.BookingStatus.PENDING, created_at__lt=cutoff
        ).order_by("created_at")
        return [to_domain_booking(row) for row in rows]

    @translate_connection_errors
    def update_status(
        self,
        booking_id: BookingId,
        expected: BookingStatus,
        status: BookingStatus,
        payment_reference: str | None = None,
    ) -> Booking | None:
        changes: dict[str, object] = {"status": status.value, "updated_at": timezone.now()}
        if payment_reference is not None:
            changes["payment_reference"] = payment_reference
        updated = models.Booking.objects.filter(
            pk=booking_id.value, status=expected.value
        ).update(**changes)
        if not updated:
            return None
        return self.get_booking(booking_id)
