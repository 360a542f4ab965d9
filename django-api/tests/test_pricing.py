"""Unit tests for rental pricing.

Run with: pytest tests/test_pricing.py -v
"""

from datetime import date
from decimal import Decimal

import pytest

from rentals.domain import PricingPolicy, compute_price, quote_price
from rentals.domain.errors import ErrorCode, InvalidDateRangeError, InvalidRateError
from rentals.domain.pricing import rental_days


class TestRentalDays:
    def test_end_date_is_exclusive(self):
        assert rental_days(date(2024, 1, 1), date(2024, 1, 4)) == 3

    def test_same_day_rental_bills_one_day(self):
        assert rental_days(date(2024, 1, 1), date(2024, 1, 1)) == 1

    def test_end_before_start_is_rejected(self):
        with pytest.raises(InvalidDateRangeError) as exc:
            rental_days(date(2024, 1, 4), date(2024, 1, 1))
        assert exc.value.code is ErrorCode.INVALID_DATE_RANGE


class TestComputePrice:
    def test_three_days_without_driver(self):
        """20/day for 2024-01-01..2024-01-04 is 60, minus 15% is 51.00."""
        total = compute_price(Decimal("20"), date(2024, 1, 1), date(2024, 1, 4), False)
        assert total.amount == Decimal("51.00")

    def test_driver_fee_is_per_day_before_discount(self):
        # (20 + 25) * 3 = 135, minus 15% = 114.75
        total = compute_price(Decimal("20"), date(2024, 1, 1), date(2024, 1, 4), True)
        assert total.amount == Decimal("114.75")

    def test_rounds_half_up_to_cents(self):
        # 0.10 * 0.85 = 0.085 -> 0.09
        total = compute_price(Decimal("0.10"), date(2024, 1, 1), date(2024, 1, 2), False)
        assert total.amount == Decimal("0.09")

    @pytest.mark.parametrize("rate", [Decimal("0"), Decimal("-5")])
    def test_non_positive_rate_is_rejected(self, rate):
        with pytest.raises(InvalidRateError):
            compute_price(rate, date(2024, 1, 1), date(2024, 1, 2), False)

    def test_same_inputs_give_same_output(self):
        args = (Decimal("32"), date(2024, 3, 1), date(2024, 3, 8), True)
        assert compute_price(*args) == compute_price(*args)


class TestQuote:
    def test_quote_itemises_the_total(self):
        quote = quote_price(Decimal("20"), date(2024, 1, 1), date(2024, 1, 4), True)
        assert quote.days == 3
        assert quote.base.amount == Decimal("60.00")
        assert quote.driver_fee.amount == Decimal("75.00")
        assert quote.discount.amount == Decimal("20.25")
        assert quote.total.amount == Decimal("114.75")

    def test_policy_overrides_fee_and_discount(self):
        policy = PricingPolicy(driver_fee_per_day=Decimal("10"), discount_rate=Decimal("0"))
        quote = policy.quote(Decimal("20"), date(2024, 1, 1), date(2024, 1, 3), True)
        assert quote.total.amount == Decimal("60.00")
        assert quote.discount.amount == Decimal("0.00")

    def test_half_cent_discount_still_adds_up(self):
        # 10.10 * 0.15 = 1.515, 10.10 * 0.85 = 8.585 -> 8.59, so the discount is 1.51
        quote = quote_price(Decimal("10.10"), date(2024, 1, 1), date(2024, 1, 2), False)
        assert quote.total.amount == Decimal("8.59")
        assert quote.discount.amount == Decimal("1.51")

    @pytest.mark.parametrize("rate", ["0.10", "10.10", "19.99", "33.33", "57.05"])
    @pytest.mark.parametrize("with_driver", [False, True])
    def test_items_sum_to_total(self, rate, with_driver):
        quote = quote_price(Decimal(rate), date(2024, 1, 1), date(2024, 1, 8), with_driver)
        assert (
            quote.base.amount + quote.driver_fee.amount - quote.discount.amount
            == quote.total.amount
        )
