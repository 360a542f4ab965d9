"""Integration tests for the booking endpoints.

Run with: pytest tests/test_bookings_api.py -v
"""

import uuid

import pytest
from django.test import override_settings
from rest_framework.test import APIClient

from rentals import models

BOOKING = {"startDate": "2024-01-01", "endDate": "2024-01-04", "withDriver": False}


def book(client: APIClient, vehicle, **overrides):
    return client.post(
        "/api/bookings", {"vehicleId": str(vehicle.id), **BOOKING, **overrides}, format="json"
    )


@pytest.mark.django_db
class TestCreateBooking:
    """Tests for POST /api/bookings"""

    def test_create_booking_prices_server_side(self, auth_client, make_db_vehicle, user):
        vehicle = make_db_vehicle()

        response = book(auth_client, vehicle, totalPrice="1.00")

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["totalPrice"] == "51.00"
        assert body["userId"] == user.pk
        assert body["paymentReference"] is None
        vehicle.refresh_from_db()
        assert vehicle.available is False

    def test_create_booking_requires_authentication(self, api_client, make_db_vehicle):
        response = book(api_client, make_db_vehicle())
        assert response.status_code == 401
        assert not models.Booking.objects.exists()

    def test_create_booking_rejects_malformed_body(self, auth_client):
        response = auth_client.post(
            "/api/bookings", {"vehicleId": "x", "startDate": "soon"}, format="json"
        )
        assert response.status_code == 400
        assert {"vehicleId", "startDate", "endDate"} <= set(response.json())

    def test_create_booking_unknown_vehicle(self, auth_client):
        response = auth_client.post(
            "/api/bookings", {"vehicleId": str(uuid.uuid4()), **BOOKING}, format="json"
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "VEHICLE_NOT_FOUND"

    def test_create_booking_reversed_dates(self, auth_client, make_db_vehicle):
        vehicle = make_db_vehicle()
        response = book(auth_client, vehicle, startDate="2024-01-05")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"
        vehicle.refresh_from_db()
        assert vehicle.available is True

    def test_second_booking_on_same_vehicle_conflicts(
        self, auth_client, make_db_vehicle, other_user
    ):
        vehicle = make_db_vehicle()
        assert book(auth_client, vehicle).status_code == 201

        auth_client.force_authenticate(user=other_user)
        response = book(auth_client, vehicle)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "VEHICLE_UNAVAILABLE"
        assert models.Booking.objects.filter(vehicle=vehicle).count() == 1


@pytest.mark.django_db
class TestReadBookings:
    """Tests for GET /api/bookings and GET /api/bookings/{id}"""

    def test_list_only_returns_own_bookings(
        self, auth_client, make_db_vehicle, user, other_user
    ):
        mine = book(auth_client, make_db_vehicle(name="A")).json()
        auth_client.force_authenticate(user=other_user)
        book(auth_client, make_db_vehicle(name="B"))

        auth_client.force_authenticate(user=user)
        response = auth_client.get("/api/bookings")

        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == [mine["id"]]

    def test_get_booking_of_another_user_is_forbidden(
        self, auth_client, make_db_vehicle, other_user
    ):
        booking = book(auth_client, make_db_vehicle()).json()
        auth_client.force_authenticate(user=other_user)

        response = auth_client.get(f"/api/bookings/{booking['id']}")

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_get_booking_not_found(self, auth_client):
        response = auth_client.get(f"/api/bookings/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "BOOKING_NOT_FOUND"

    def test_get_booking_invalid_id(self, auth_client):
        response = auth_client.get("/api/bookings/abc")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_BOOKING_ID"

    def test_list_embeds_vehicle(self, auth_client, make_db_vehicle):
        vehicle = make_db_vehicle(name="Honda CBR")
        book(auth_client, vehicle)

        (entry,) = auth_client.get("/api/bookings").json()

        assert entry["vehicleId"] == str(vehicle.id)
        assert entry["vehicle"]["name"] == "Honda CBR"
        assert entry["vehicle"]["available"] is False
        assert entry["totalPrice"] == "51.00"


@pytest.mark.django_db
class TestCancelBooking:
    """Tests for POST /api/bookings/{id}/cancel"""

    def test_cancel_releases_vehicle(self, auth_client, make_db_vehicle):
        vehicle = make_db_vehicle()
        booking = book(auth_client, vehicle).json()

        response = auth_client.post(f"/api/bookings/{booking['id']}/cancel")

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        vehicle.refresh_from_db()
        assert vehicle.available is True

    def test_cancel_twice_conflicts(self, auth_client, make_db_vehicle):
        booking = book(auth_client, make_db_vehicle()).json()
        auth_client.post(f"/api/bookings/{booking['id']}/cancel")

        response = auth_client.post(f"/api/bookings/{booking['id']}/cancel")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_TRANSITION"


@pytest.mark.django_db
class TestPayment:
    """Tests for payment session creation and the payment callback."""

    def test_payment_session_for_pending_booking(self, auth_client, make_db_vehicle):
        booking = book(auth_client, make_db_vehicle()).json()

        response = auth_client.post(f"/api/bookings/{booking['id']}/payment-session")

        assert response.status_code == 201
        body = response.json()
        assert body["bookingId"] == booking["id"]
        assert body["amount"] == "51.00"
        assert body["currency"] == "usd"
        assert body["sessionId"].startswith("sim_")

    def test_payment_session_adapter_failure(self, auth_client, make_db_vehicle):
        booking = book(auth_client, make_db_vehicle()).json()
        with override_settings(
            RENTALS={"PAYMENT_ADAPTER": "tests.factories.UnavailablePaymentAdapter"}
        ):
            response = auth_client.post(f"/api/bookings/{booking['id']}/payment-session")

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "PAYMENT_ADAPTER_FAILURE"

    def test_success_callback_confirms(
        self, auth_client, callback_client, make_db_vehicle
    ):
        vehicle = make_db_vehicle()
        booking = book(auth_client, vehicle).json()

        response = callback_client.post(
            f"/api/bookings/{booking['id']}/payment-callback",
            {"success": True, "paymentReference": "pi_123"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "confirmed"
        assert response.json()["paymentReference"] == "pi_123"
        vehicle.refresh_from_db()
        assert vehicle.available is False

    def test_duplicate_success_callback_is_idempotent(
        self, auth_client, callback_client, make_db_vehicle
    ):
        booking = book(auth_client, make_db_vehicle()).json()
        url = f"/api/bookings/{booking['id']}/payment-callback"
        payload = {"success": True, "paymentReference": "pi_123"}

        first = callback_client.post(url, payload, format="json")
        second = callback_client.post(url, payload, format="json")

        assert first.status_code == second.status_code == 200
        assert second.json() == first.json()

    def test_failure_callback_cancels_and_releases(
        self, auth_client, callback_client, make_db_vehicle
    ):
        vehicle = make_db_vehicle()
        booking = book(auth_client, vehicle).json()

        response = callback_client.post(
            f"/api/bookings/{booking['id']}/payment-callback",
            {"success": False},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        vehicle.refresh_from_db()
        assert vehicle.available is True

    def test_success_callback_requires_reference(
        self, auth_client, callback_client, make_db_vehicle
    ):
        booking = book(auth_client, make_db_vehicle()).json()
        response = callback_client.post(
            f"/api/bookings/{booking['id']}/payment-callback",
            {"success": True},
            format="json",
        )
        assert response.status_code == 400
        assert "paymentReference" in response.json()

    def test_callback_after_cancellation_conflicts(
        self, auth_client, callback_client, make_db_vehicle
    ):
        booking = book(auth_client, make_db_vehicle()).json()
        auth_client.post(f"/api/bookings/{booking['id']}/cancel")

        response = callback_client.post(
            f"/api/bookings/{booking['id']}/payment-callback",
            {"success": True, "paymentReference": "pi_late"},
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_TRANSITION"

    def test_callback_secret_is_enforced(self, auth_client, callback_client, make_db_vehicle):
        booking = book(auth_client, make_db_vehicle()).json()
        url = f"/api/bookings/{booking['id']}/payment-callback"
        payload = {"success": True, "paymentReference": "pi_1"}

        unsigned = APIClient().post(url, payload, format="json")
        wrong = APIClient().post(url, payload, format="json", HTTP_X_PAYMENT_SECRET="guess")

        assert unsigned.status_code == wrong.status_code == 403
        assert models.Booking.objects.get(pk=booking["id"]).status == "pending"

    def test_unsigned_callback_refused_without_configured_secret(
        self, auth_client, make_db_vehicle
    ):
        booking = book(auth_client, make_db_vehicle()).json()

        response = APIClient().post(
            f"/api/bookings/{booking['id']}/payment-callback",
            {"success": True, "paymentReference": "forged"},
            format="json",
        )

        assert response.status_code == 403
        stored = models.Booking.objects.get(pk=booking["id"])
        assert stored.status == "pending"
        assert stored.payment_reference is None

    def test_unsigned_callback_allowed_when_enabled(self, auth_client, make_db_vehicle):
        booking = book(auth_client, make_db_vehicle()).json()

        with override_settings(RENTALS={"ALLOW_UNSIGNED_PAYMENT_CALLBACKS": True}):
            response = APIClient().post(
                f"/api/bookings/{booking['id']}/payment-callback",
                {"success": False},
                format="json",
            )

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
