"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from rentals import models
from rentals.domain import Vehicle
from rentals.services import BookingLedger, BookingService, CatalogService
from rentals.stores import InMemoryBookingStore, InMemoryVehicleStore
from tests.factories import FakeClock, RecordingPaymentAdapter, build_vehicle


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def vehicle() -> Vehicle:
    return build_vehicle()


@pytest.fixture
def vehicle_store(vehicle: Vehicle) -> InMemoryVehicleStore:
    return InMemoryVehicleStore([vehicle])


@pytest.fixture
def booking_store(vehicle_store: InMemoryVehicleStore) -> InMemoryBookingStore:
    return InMemoryBookingStore(vehicle_store)


@pytest.fixture
def ledger(vehicle_store, booking_store, clock) -> BookingLedger:
    return BookingLedger(vehicle_store, booking_store, clock=clock)


@pytest.fixture
def payments() -> RecordingPaymentAdapter:
    return RecordingPaymentAdapter()


@pytest.fixture
def booking_service(ledger, payments, clock) -> BookingService:
    return BookingService(ledger, payments, clock=clock)


@pytest.fixture
def catalog_service(vehicle_store) -> CatalogService:
    return CatalogService(vehicle_store)


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="alice", password="pw-alice")


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username="bob", password="pw-bob")


@pytest.fixture
def make_db_vehicle(db):
    def factory(**overrides) -> models.Vehicle:
        fields = {
            "name": "Toyota Corolla",
            "type": models.VehicleType.CAR,
            "category": "Economy",
            "description": "Compact car",
            "rate_per_day": Decimal("20.00"),
        }
        fields.update(overrides)
        return models.Vehicle.objects.create(**fields)

    return factory


@pytest.fixture
def auth_client(api_client: APIClient, user) -> APIClient:
    api_client.force_authenticate(user=user)
    return api_client


CALLBACK_SECRET = "test-callback-secret"


@pytest.fixture
def callback_client(settings) -> APIClient:
    """Client for the payment provider, signing with the configured secret."""
    settings.RENTALS = {"PAYMENT_CALLBACK_SECRET": CALLBACK_SECRET}
    client = APIClient()
    client.credentials(HTTP_X_PAYMENT_SECRET=CALLBACK_SECRET)
    return client
