from django.urls import path

from rentals.handlers import (
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

urlpatterns = [
    path("register", RegisterView.as_view(), name="register"),
    path("user", CurrentUserView.as_view(), name="current-user"),
    path("vehicles", VehicleListView.as_view(), name="vehicle-list"),
    path("vehicles/<str:vehicle_id>", VehicleDetailView.as_view(), name="vehicle-detail"),
    path(
        "vehicles/<str:vehicle_id>/quote",
        VehicleQuoteView.as_view(),
        name="vehicle-quote",
    ),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("bookings/<str:booking_id>", BookingDetailView.as_view(), name="booking-detail"),
    path(
        "bookings/<str:booking_id>/cancel",
        BookingCancelView.as_view(),
        name="booking-cancel",
    ),
    path(
        "bookings/<str:booking_id>/payment-session",
        PaymentSessionView.as_view(),
        name="booking-payment-session",
    ),
    path(
        "bookings/<str:booking_id>/payment-callback",
        PaymentCallbackView.as_view(),
        name="booking-payment-callback",
    ),
]
