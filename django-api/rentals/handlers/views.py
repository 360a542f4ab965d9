"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from rentals.cache import vehicle_detail_key, vehicle_list_key
from rentals.conf import get_rental_settings
from rentals.dependencies import get_booking_service, get_catalog_service
from rentals.domain.errors import DomainError, ErrorCode
from rentals.handlers.permissions import HasPaymentCallbackSecret
from rentals.handlers.serializers import (
    BookingHistorySerializer,
    BookingRequestSerializer,
    BookingSerializer,
    PaymentCallbackSerializer,
    PaymentSessionSerializer,
    PriceQuoteSerializer,
    QuoteQuerySerializer,
    RegisterSerializer,
    UserSerializer,
    VehicleSerializer,
)
from rentals.services.parsing import parse_vehicle_id

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.INVALID_DATE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_VEHICLE_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_VEHICLE_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_BOOKING_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VEHICLE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.VEHICLE_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.PAYMENT_ADAPTER_FAILURE: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.STORAGE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    http_status = ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST)
    if http_status >= 500:
        logger.error("Request failed: %s", error, exc_info=error.__cause__)
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=http_status,
    )


class DomainAPIView(APIView):
    """APIView that renders domain errors as {"error": {code, message}}."""

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            return error_response(exc)
        return super().handle_exception(exc)


class VehicleListView(DomainAPIView):
    """Handler for GET /api/vehicles?type="""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        vehicle_type = request.query_params.get("type") or None
        key = vehicle_list_key(vehicle_type)
        data = cache.get(key)
        if data is None:
            vehicles = get_catalog_service().list_vehicles(vehicle_type)
            data = VehicleSerializer(vehicles, many=True).data
            cache.set(key, data, get_rental_settings().catalog_cache_timeout)
        return Response(data)


class VehicleDetailView(DomainAPIView):
    """Handler for GET /api/vehicles/{vehicle_id}"""

    permission_classes = [AllowAny]

    def get(self, request: Request, vehicle_id: str) -> Response:
        key = vehicle_detail_key(str(parse_vehicle_id(vehicle_id)))
        data = cache.get(key)
        if data is None:
            vehicle = get_catalog_service().get_vehicle(vehicle_id)
            data = VehicleSerializer(vehicle).data
            cache.set(key, data, get_rental_settings().catalog_cache_timeout)
        return Response(data)


class VehicleQuoteView(DomainAPIView):
    """Handler for GET /api/vehicles/{vehicle_id}/quote"""

    permission_classes = [AllowAny]

    def get(self, request: Request, vehicle_id: str) -> Response:
        query = QuoteQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        quote = get_catalog_service().quote(
            vehicle_id,
            query.validated_data["startDate"],
            query.validated_data["endDate"],
            query.validated_data["withDriver"],
        )
        return Response(PriceQuoteSerializer(quote).data)


class BookingListView(DomainAPIView):
    """Handler for GET and POST /api/bookings"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        history = get_booking_service().list_booking_history(request.user.pk)
        return Response(BookingHistorySerializer(history, many=True).data)

    def post(self, request: Request) -> Response:
        body = BookingRequestSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        booking = get_booking_service().create_booking(
            request.user.pk,
            str(body.validated_data["vehicleId"]),
            body.validated_data["startDate"],
            body.validated_data["endDate"],
            body.validated_data["withDriver"],
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class BookingDetailView(DomainAPIView):
    """Handler for GET /api/bookings/{booking_id}"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, booking_id: str) -> Response:
        booking = get_booking_service().get_booking(request.user.pk, booking_id)
        return Response(BookingSerializer(booking).data)


class BookingCancelView(DomainAPIView):
    """Handler for POST /api/bookings/{booking_id}/cancel"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, booking_id: str) -> Response:
        booking = get_booking_service().cancel_booking(request.user.pk, booking_id)
        return Response(BookingSerializer(booking).data)


class PaymentSessionView(DomainAPIView):
    """Handler for POST /api/bookings/{booking_id}/payment-session"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, booking_id: str) -> Response:
        session = get_booking_service().start_payment(request.user.pk, booking_id)
        return Response(
            PaymentSessionSerializer(session).data, status=status.HTTP_201_CREATED
        )


class PaymentCallbackView(DomainAPIView):
    """Handler for POST /api/bookings/{booking_id}/payment-callback"""

    authentication_classes = []
    permission_classes = [HasPaymentCallbackSecret]

    def post(self, request: Request, booking_id: str) -> Response:
        body = PaymentCallbackSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        booking = get_booking_service().handle_payment_outcome(
            booking_id,
            body.validated_data["success"],
            body.validated_data.get("paymentReference"),
        )
        return Response(BookingSerializer(booking).data)


class RegisterView(DomainAPIView):
    """Handler for POST /api/register"""

    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        body = RegisterSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        user = body.save()
        logger.info("Registered user %s", user.pk)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class CurrentUserView(DomainAPIView):
    """Handler for GET /api/user"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        return Response(UserSerializer(request.user).data)
