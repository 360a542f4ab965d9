"""Payment adapter interface.

Booking logic only sees this interface, so switching provider means writing a
new adapter and pointing settings.RENTALS["PAYMENT_ADAPTER"] at it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from rentals.domain import Money


class PaymentAdapterError(Exception):
    """Raised by adapters when the provider rejects or cannot serve a request."""


@dataclass(frozen=True)
class PaymentSession:
    """Handle the client uses to complete a payment with the provider."""

    session_id: str
    client_secret: str
    booking_ref: str
    amount: Money
    currency: str


class PaymentAdapter(ABC):
    """Interface for payment providers."""

    @abstractmethod
    def create_payment_session(
        self, amount: Money, currency: str, booking_ref: str
    ) -> PaymentSession:
        """Open a payment session for amount.

        The provider later reports the outcome through the payment callback
        endpoint, quoting booking_ref.

        Raises:
            PaymentAdapterError: If the provider cannot create the session.
        """
        ...
