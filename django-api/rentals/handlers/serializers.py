"""Serializers for request validation and domain model responses.

Request serializers reject malformed input before it reaches a service.
Response serializers read straight from the frozen domain dataclasses.
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

MONEY = {"max_digits": 10, "decimal_places": 2}


class VehicleSerializer(serializers.Serializer):
    """Serializer for Vehicle domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    type = serializers.CharField(source="type.value")
    category = serializers.CharField()
    description = serializers.CharField()
    ratePerDay = serializers.DecimalField(source="rate_per_day.amount", **MONEY)
    available = serializers.BooleanField()
    imageUrl = serializers.CharField(source="image_url", allow_null=True)
    features = serializers.ListField(child=serializers.CharField())


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.UUIDField(source="id.value")
    userId = serializers.IntegerField(source="user_id")
    vehicleId = serializers.UUIDField(source="vehicle_id.value")
    startDate = serializers.DateField(source="start_date")
    endDate = serializers.DateField(source="end_date")
    withDriver = serializers.BooleanField(source="with_driver")
    totalPrice = serializers.DecimalField(source="total_price.amount", **MONEY)
    status = serializers.CharField(source="status.value")
    paymentReference = serializers.CharField(source="payment_reference", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")


class BookingHistorySerializer(serializers.Serializer):
    """Booking with its vehicle embedded under "vehicle"."""

    def to_representation(self, instance):
        data = BookingSerializer(instance.booking).data
        data["vehicle"] = (
            VehicleSerializer(instance.vehicle).data if instance.vehicle is not None else None
        )
        return data


class PriceQuoteSerializer(serializers.Serializer):
    """Serializer for PriceQuote."""

    days = serializers.IntegerField()
    base = serializers.DecimalField(source="base.amount", **MONEY)
    driverFee = serializers.DecimalField(source="driver_fee.amount", **MONEY)
    discount = serializers.DecimalField(source="discount.amount", **MONEY)
    totalPrice = serializers.DecimalField(source="total.amount", **MONEY)


class PaymentSessionSerializer(serializers.Serializer):
    """Serializer for PaymentSession."""

    sessionId = serializers.CharField(source="session_id")
    clientSecret = serializers.CharField(source="client_secret")
    bookingId = serializers.CharField(source="booking_ref")
    amount = serializers.DecimalField(source="amount.amount", **MONEY)
    currency = serializers.CharField()


class BookingRequestSerializer(serializers.Serializer):
    """Body of POST /api/bookings. Prices are never taken from the client."""

    vehicleId = serializers.UUIDField()
    startDate = serializers.DateField()
    endDate = serializers.DateField()
    withDriver = serializers.BooleanField(default=False)


class QuoteQuerySerializer(serializers.Serializer):
    """Query string of GET /api/vehicles/{id}/quote."""

    startDate = serializers.DateField()
    endDate = serializers.DateField()
    withDriver = serializers.BooleanField(default=False)


class PaymentCallbackSerializer(serializers.Serializer):
    """Body of POST /api/bookings/{id}/payment-callback."""

    success = serializers.BooleanField()
    paymentReference = serializers.CharField(
        required=False, allow_null=True, max_length=255
    )

    def validate(self, attrs):
        if attrs["success"] and not attrs.get("paymentReference"):
            raise serializers.ValidationError(
                {"paymentReference": "Required when the payment succeeded."}
            )
        return attrs


class UserSerializer(serializers.Serializer):
    """Serializer for the signed-in user. Never includes the password."""

    id = serializers.IntegerField(source="pk")
    username = serializers.CharField()
    email = serializers.EmailField()
    firstName = serializers.CharField(source="first_name")
    lastName = serializers.CharField(source="last_name")


class RegisterSerializer(serializers.Serializer):
    """Body of POST /api/register."""

    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    firstName = serializers.CharField(max_length=150, required=False, default="")
    lastName = serializers.CharField(max_length=150, required=False, default="")

    def validate_username(self, value):
        if get_user_model().objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError("Username already exists.")
        return value

    def validate_email(self, value):
        if get_user_model().objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already exists.")
        return value

    def validate(self, attrs):
        candidate = get_user_model()(
            username=attrs["username"],
            email=attrs["email"],
            first_name=attrs["firstName"],
            last_name=attrs["lastName"],
        )
        try:
            validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"password": list(exc.messages)}) from exc
        return attrs

    def create(self, validated_data):
        return get_user_model().objects.create_user(
            username=validated_data["username"],
            email=validated_data["email"],
            password=validated_data["password"],
            first_name=validated_data["firstName"],
            last_name=validated_data["lastName"],
        )
