"""Test-mode payment adapter that never contacts a real provider."""

import logging
import secrets
import uuid

from rentals.domain import Money
from rentals.payments.interfaces import PaymentAdapter, PaymentAdapterError, PaymentSession

logger = logging.getLogger(__name__)


class SimulatedPaymentAdapter(PaymentAdapter):
    """Issues fake sessions; the client posts the outcome to the callback itself."""

    def create_payment_session(
        self, amount: Money, currency: str, booking_ref: str
    ) -> PaymentSession:
        if amount.amount <= 0:
            raise PaymentAdapterError("amount must be positive")
        session_id = f"sim_{uuid.uuid4().hex}"
        logger.info(
            "Simulated payment session %s for booking %s: %s %s",
            session_id,
            booking_ref,
            amount,
            currency,
        )
        return PaymentSession(
            session_id=session_id,
            client_secret=f"{session_id}_secret_{secrets.token_hex(8)}",
            booking_ref=booking_ref,
            amount=amount,
            currency=currency,
        )
