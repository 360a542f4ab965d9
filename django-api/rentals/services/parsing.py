"""Parse raw identifiers coming from URLs and request bodies."""

from rentals.domain import BookingId, VehicleId, VehicleType
from rentals.domain.errors import (
    InvalidBookingIdError,
    InvalidVehicleIdError,
    InvalidVehicleTypeError,
)


def parse_vehicle_id(value: str) -> VehicleId:
    try:
        return VehicleId.from_string(str(value))
    except ValueError as exc:
        raise InvalidVehicleIdError() from exc


def parse_booking_id(value: str) -> BookingId:
    try:
        return BookingId.from_string(str(value))
    except ValueError as exc:
        raise InvalidBookingIdError() from exc


def parse_vehicle_type(value: str | None) -> VehicleType | None:
    if not value:
        return None
    try:
        return VehicleType(value)
    except ValueError as exc:
        raise InvalidVehicleTypeError() from exc
