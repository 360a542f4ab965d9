"""Rental pricing.

Pure functions only. A rental is billed per calendar day, counting the start
date but not the end date, with a minimum of one day. An optional driver adds
a flat fee per day, and the student discount applies to the whole subtotal.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from rentals.domain.errors import InvalidDateRangeError, InvalidRateError
from rentals.domain.value_objects import Money

DEFAULT_DRIVER_FEE_PER_DAY = Decimal("25.00")
DEFAULT_STUDENT_DISCOUNT_RATE = Decimal("0.15")


@dataclass(frozen=True)
class PriceQuote:
    """Itemised price for a rental request."""

    days: int
    base: Money
    driver_fee: Money
    discount: Money
    total: Money


def rental_days(start_date: date, end_date: date) -> int:
    """Number of billable days between two dates.

    Raises:
        InvalidDateRangeError: If end_date is before start_date.
    """
    if end_date < start_date:
        raise InvalidDateRangeError()
    return max(1, (end_date - start_date).days)


def quote_price(
    rate_per_day: Decimal,
    start_date: date,
    end_date: date,
    with_driver: bool,
    *,
    driver_fee_per_day: Decimal = DEFAULT_DRIVER_FEE_PER_DAY,
    discount_rate: Decimal = DEFAULT_STUDENT_DISCOUNT_RATE,
) -> PriceQuote:
    """Return the itemised price of renting at rate_per_day for the range.

    Raises:
        InvalidRateError: If rate_per_day is not positive.
        InvalidDateRangeError: If end_date is before start_date.
    """
    if rate_per_day <= 0:
        raise InvalidRateError()
    days = rental_days(start_date, end_date)

    base = Money(rate_per_day * days).rounded()
    driver_fee = Money(
        driver_fee_per_day * days if with_driver else Decimal("0")
    ).rounded()
    subtotal = base.amount + driver_fee.amount
    total = Money(subtotal * (1 - discount_rate)).rounded()

    # the discount is whatever rounding left, so the items always add up
    return PriceQuote(
        days=days,
        base=base,
        driver_fee=driver_fee,
        discount=Money(subtotal - total.amount),
        total=total,
    )


def compute_price(
    rate_per_day: Decimal,
    start_date: date,
    end_date: date,
    with_driver: bool,
    *,
    driver_fee_per_day: Decimal = DEFAULT_DRIVER_FEE_PER_DAY,
    discount_rate: Decimal = DEFAULT_STUDENT_DISCOUNT_RATE,
) -> Money:
    """Return the total price, rounded half-up to cents."""
    return quote_price(
        rate_per_day,
        start_date,
        end_date,
        with_driver,
        driver_fee_per_day=driver_fee_per_day,
        discount_rate=discount_rate,
    ).total


@dataclass(frozen=True)
class PricingPolicy:
    """Configured driver fee and discount, applied to every quote."""

    driver_fee_per_day: Decimal = DEFAULT_DRIVER_FEE_PER_DAY
    discount_rate: Decimal = DEFAULT_STUDENT_DISCOUNT_RATE

    def quote(
        self, rate_per_day: Decimal, start_date: date, end_date: date, with_driver: bool
    ) -> PriceQuote:
        return quote_price(
            rate_per_day,
            start_date,
            end_date,
            with_driver,
            driver_fee_per_day=self.driver_fee_per_day,
            discount_rate=self.discount_rate,
        )
