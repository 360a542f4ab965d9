from rentals.services.booking_ledger import BookingLedger
from rentals.services.booking_service import BookingService
from rentals.services.catalog_service import CatalogService

__all__ = ["BookingLedger", "BookingService", "CatalogService"]
