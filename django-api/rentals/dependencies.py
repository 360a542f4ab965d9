"""Service construction.

Services are built explicitly from their stores for each request. The Django
stores are stateless; connections belong to Django's connection handling,
which opens them per request and closes them at shutdown.
"""

from datetime import timedelta

from django.utils.module_loading import import_string

from rentals.conf import get_rental_settings
from rentals.domain import PricingPolicy
from rentals.payments.interfaces import PaymentAdapter
from rentals.services import BookingLedger, BookingService, CatalogService
from rentals.stores.django_store import DjangoBookingStore, DjangoVehicleStore


def get_pricing_policy() -> PricingPolicy:
    conf = get_rental_settings()
    return PricingPolicy(
        driver_fee_per_day=conf.driver_fee_per_day,
        discount_rate=conf.student_discount_rate,
    )


def get_payment_adapter() -> PaymentAdapter:
    adapter_class = import_string(get_rental_settings().payment_adapter)
    return adapter_class()


def get_catalog_service() -> CatalogService:
    return CatalogService(DjangoVehicleStore(), pricing=get_pricing_policy())


def get_booking_ledger() -> BookingLedger:
    return BookingLedger(
        DjangoVehicleStore(), DjangoBookingStore(), pricing=get_pricing_policy()
    )


def get_booking_service() -> BookingService:
    conf = get_rental_settings()
    return BookingService(
        get_booking_ledger(),
        get_payment_adapter(),
        currency=conf.currency,
        pending_ttl=timedelta(minutes=conf.pending_booking_ttl_minutes),
    )
