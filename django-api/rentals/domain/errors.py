"""Domain error codes for the rentals module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_RATE = "INVALID_RATE"
    INVALID_VEHICLE_ID = "INVALID_VEHICLE_ID"
    INVALID_VEHICLE_TYPE = "INVALID_VEHICLE_TYPE"
    INVALID_BOOKING_ID = "INVALID_BOOKING_ID"
    VEHICLE_NOT_FOUND = "VEHICLE_NOT_FOUND"
    VEHICLE_UNAVAILABLE = "VEHICLE_UNAVAILABLE"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    UNAUTHORIZED = "UNAUTHORIZED"
    PAYMENT_ADAPTER_FAILURE = "PAYMENT_ADAPTER_FAILURE"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidDateRangeError(DomainError):
    """Raised when a rental ends before it starts."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DATE_RANGE,
            message="End date must not be before start date",
        )


class InvalidRateError(DomainError):
    """Raised when a daily rate is zero or negative."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RATE,
            message="Daily rate must be greater than zero",
        )


class InvalidVehicleIdError(DomainError):
    """Raised when a vehicle ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_VEHICLE_ID,
            message="Invalid vehicle ID format",
        )


class InvalidVehicleTypeError(DomainError):
    """Raised when filtering by a vehicle type that does not exist."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_VEHICLE_TYPE,
            message="Vehicle type must be one of: car, bike, bus",
        )


class InvalidBookingIdError(DomainError):
    """Raised when a booking ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BOOKING_ID,
            message="Invalid booking ID format",
        )


class VehicleNotFoundError(DomainError):
    """Raised when a vehicle is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.VEHICLE_NOT_FOUND,
            message="Vehicle not found",
        )


class VehicleUnavailableError(DomainError):
    """Raised when a vehicle is already held by an active booking."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.VEHICLE_UNAVAILABLE,
            message="Vehicle is not available",
        )


class BookingNotFoundError(DomainError):
    """Raised when a booking is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )


class InvalidTransitionError(DomainError):
    """Raised when a booking cannot move to the requested status."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Booking cannot move from {current} to {target}",
        )


class BookingAccessDeniedError(DomainError):
    """Raised when the caller does not own the booking."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.UNAUTHORIZED,
            message="You do not have access to this booking",
        )


class PaymentAdapterFailureError(DomainError):
    """Raised when the payment provider could not create a session."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_ADAPTER_FAILURE,
            message="Payment provider is unavailable, please try again later",
        )


class StorageUnavailableError(DomainError):
    """Raised when the persistence backend cannot be reached."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORAGE_UNAVAILABLE,
            message="Service temporarily unavailable",
        )
