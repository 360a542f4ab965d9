"""Catalog service - read access to vehicles and price quotes."""

from datetime import date

from rentals.domain import PriceQuote, PricingPolicy, Vehicle
from rentals.domain.errors import VehicleNotFoundError
from rentals.services.parsing import parse_vehicle_id, parse_vehicle_type
from rentals.stores.interfaces import VehicleStore


class CatalogService:
    """Service for vehicle catalog operations."""

    def __init__(self, store: VehicleStore, pricing: PricingPolicy | None = None) -> None:
        self._store = store
        self._pricing = pricing or PricingPolicy()

    def list_vehicles(self, vehicle_type: str | None = None) -> list[Vehicle]:
        """Return all vehicles, optionally filtered by exact type.

        Raises:
            InvalidVehicleTypeError: If vehicle_type is not car, bike or bus.
        """
        return self._store.list_vehicles(parse_vehicle_type(vehicle_type))

    def get_vehicle(self, vehicle_id: str) -> Vehicle:
        """Return a vehicle by ID.

        Raises:
            InvalidVehicleIdError: If the vehicle_id is not a valid UUID.
            VehicleNotFoundError: If the vehicle does not exist.
        """
        vehicle = self._store.get_vehicle(parse_vehicle_id(vehicle_id))
        if vehicle is None:
            raise VehicleNotFoundError()
        return vehicle

    def quote(
        self, vehicle_id: str, start_date: date, end_date: date, with_driver: bool
    ) -> PriceQuote:
        """Price a prospective rental without reserving anything."""
        vehicle = self.get_vehicle(vehicle_id)
        return self._pricing.quote(
            vehicle.rate_per_day.amount, start_date, end_date, with_driver
        )
