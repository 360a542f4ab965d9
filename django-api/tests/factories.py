"""Test doubles and builders shared across test modules."""

import uuid
from datetime import datetime, timedelta
from decimal import Decimal

from rentals.domain import Money, Vehicle, VehicleId, VehicleType
from rentals.payments import PaymentAdapter, PaymentAdapterError, PaymentSession


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingPaymentAdapter(PaymentAdapter):
    """Payment adapter double that records calls and can be told to fail."""

    def __init__(self) -> None:
        self.calls: list[tuple[Money, str, str]] = []
        self.fail = False

    def create_payment_session(
        self, amount: Money, currency: str, booking_ref: str
    ) -> PaymentSession:
        self.calls.append((amount, currency, booking_ref))
        if self.fail:
            raise PaymentAdapterError("provider down")
        return PaymentSession(
            session_id=f"sess_{len(self.calls)}",
            client_secret="secret",
            booking_ref=booking_ref,
            amount=amount,
            currency=currency,
        )


def build_vehicle(**overrides) -> Vehicle:
    fields = {
        "id": VehicleId(uuid.uuid4()),
        "name": "Toyota Corolla",
        "type": VehicleType.CAR,
        "category": "Economy",
        "description": "Compact car",
        "rate_per_day": Money(Decimal("20.00")),
        "available": True,
    }
    fields.update(overrides)
    return Vehicle(**fields)


class UnavailablePaymentAdapter(PaymentAdapter):
    """Adapter whose provider is always down."""

    def create_payment_session(
        self, amount: Money, currency: str, booking_ref: str
    ) -> PaymentSession:
        raise PaymentAdapterError("connection refused")
