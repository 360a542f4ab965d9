"""Rental settings loaded from RENTALS_* environment variables.

Keys in settings.RENTALS take precedence over the environment, so
override_settings(RENTALS={...}) works in tests.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rentals.domain.pricing import DEFAULT_DRIVER_FEE_PER_DAY, DEFAULT_STUDENT_DISCOUNT_RATE


class RentalSettings(BaseSettings):
    """Pricing, payment and cache settings for the rentals app."""

    model_config = SettingsConfigDict(
        env_prefix="RENTALS_", case_sensitive=False, extra="ignore", frozen=True
    )

    driver_fee_per_day: Decimal = DEFAULT_DRIVER_FEE_PER_DAY
    student_discount_rate: Decimal = DEFAULT_STUDENT_DISCOUNT_RATE
    currency: str = "usd"
    pending_booking_ttl_minutes: int = 30
    payment_adapter: str = "rentals.payments.simulated.SimulatedPaymentAdapter"
    payment_callback_secret: str = ""
    # only for local development with the simulated adapter
    allow_unsigned_payment_callbacks: bool = False
    catalog_cache_timeout: int = 300

    @field_validator("currency")
    @classmethod
    def lowercase_currency(cls, value: str) -> str:
        return value.lower()


@lru_cache
def get_rental_settings() -> RentalSettings:
    """Get the cached settings instance."""
    overrides = {key.lower(): value for key, value in getattr(settings, "RENTALS", {}).items()}
    return RentalSettings(_env_file=Path(settings.BASE_DIR) / ".env", **overrides)


@receiver(setting_changed)
def reset_rental_settings(*, setting, **kwargs):
    if setting in ("RENTALS", "BASE_DIR"):
        get_rental_settings.cache_clear()
