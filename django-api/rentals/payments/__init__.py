from rentals.payments.interfaces import PaymentAdapter, PaymentAdapterError, PaymentSession
from rentals.payments.simulated import SimulatedPaymentAdapter

__all__ = [
    "PaymentAdapter",
    "PaymentAdapterError",
    "PaymentSession",
    "SimulatedPaymentAdapter",
]
