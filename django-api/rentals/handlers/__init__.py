from rentals.handlers.views import (
    BookingCancelView,
    BookingDetailView,
    BookingListView,
    CurrentUserView,
    PaymentCallbackView,
    PaymentSessionView,
    RegisterView,
    VehicleDetailView,
    VehicleListView,
    VehicleQuoteView,
)

__all__ = [
    "BookingCancelView",
    "BookingDetailView",
    "BookingListView",
    "CurrentUserView",
    "PaymentCallbackView",
    "PaymentSessionView",
    "RegisterView",
    "VehicleDetailView",
    "VehicleListView",
    "VehicleQuoteView",
]
