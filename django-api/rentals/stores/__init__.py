from rentals.stores.interfaces import BookingStore, VehicleStore
from rentals.stores.memory_store import InMemoryBookingStore, InMemoryVehicleStore

__all__ = [
    "BookingStore",
    "VehicleStore",
    "InMemoryBookingStore",
    "InMemoryVehicleStore",
]
