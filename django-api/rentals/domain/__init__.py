from rentals.domain.models import Booking, BookingWithVehicle, Vehicle
from rentals.domain.pricing import PriceQuote, PricingPolicy, compute_price, quote_price
from rentals.domain.value_objects import (
    BookingId,
    BookingStatus,
    Money,
    VehicleId,
    VehicleType,
)

__all__ = [
    "Booking",
    "BookingWithVehicle",
    "Vehicle",
    "BookingId",
    "VehicleId",
    "BookingStatus",
    "VehicleType",
    "Money",
    "PriceQuote",
    "PricingPolicy",
    "compute_price",
    "quote_price",
]
