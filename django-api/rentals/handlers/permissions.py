import hmac

from rest_framework.permissions import BasePermission

from rentals.conf import get_rental_settings

PAYMENT_SECRET_HEADER = "X-Payment-Secret"


class HasPaymentCallbackSecret(BasePermission):
    """Payment callbacks must quote the shared secret.

    With no secret configured every callback is refused, unless unsigned
    callbacks were explicitly allowed for local development.
    """

    message = "Invalid payment callback credentials."

    def has_permission(self, request, view) -> bool:
        conf = get_rental_settings()
        expected = conf.payment_callback_secret
        if not expected:
            return conf.allow_unsigned_payment_callbacks
        supplied = request.headers.get(PAYMENT_SECRET_HEADER, "")
        return hmac.compare_digest(supplied.encode(), expected.encode())
