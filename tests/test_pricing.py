"""
Unit tests for the pricing computation (services/pricing.py).
"""
from decimal import Decimal

import pytest

from app.services.pricing import compute_pricing, round_money


class TestComputePricing:

    def test_single_line(self):
        pricing = compute_pricing([(Decimal("100.00"), 2)])

        assert pricing.subtotal == Decimal("200.00")
        assert pricing.tax == Decimal("10.00")
        assert pricing.shipping == Decimal("50")
        assert pricing.total == Decimal("260.00")

    def test_multiple_lines_are_summed(self):
        pricing = compute_pricing([(Decimal("19.99"), 3), (Decimal("5.50"), 2)])

        # 59.97 + 11.00 = 70.97, tax 3.5485 -> 3.55
        assert pricing.subtotal == Decimal("70.97")
        assert pricing.tax == Decimal("3.55")
        assert pricing.total == Decimal("124.52")

    def test_tax_rounds_half_up(self):
        # 10.10 * 0.05 = 0.505
        pricing = compute_pricing([(Decimal("10.10"), 1)])

        assert pricing.tax == Decimal("0.51")
        assert pricing.total == Decimal("60.61")

    def test_lines_are_not_rounded_individually(self):
        # subtotal 0.999 kept as is; rounding each line first would give 51.04
        pricing = compute_pricing([(Decimal("0.333"), 3)])

        assert pricing.subtotal == Decimal("0.999")
        assert pricing.tax == Decimal("0.05")
        assert pricing.total == Decimal("51.05")

    def test_empty_lines_only_shipping(self):
        pricing = compute_pricing([])

        assert pricing.subtotal == Decimal("0")
        assert pricing.tax == Decimal("0.00")
        assert pricing.total == Decimal("50.00")

    def test_custom_rate_and_shipping(self):
        pricing = compute_pricing([(Decimal("40.00"), 1)], tax_rate=Decimal("0.10"), shipping=Decimal("0"))

        assert pricing.tax == Decimal("4.00")
        assert pricing.total == Decimal("44.00")

    def test_accepts_float_prices(self):
        pricing = compute_pricing([(49.5, 2)])

        assert pricing.subtotal == Decimal("99.0")
        assert pricing.total == Decimal("153.95")

    @pytest.mark.parametrize("lines", [
        [(Decimal("-1.00"), 1)],
        [(Decimal("10.00"), 0)],
        [(Decimal("10.00"), -2)],
    ])
    def test_rejects_invalid_lines(self, lines):
        with pytest.raises(ValueError):
            compute_pricing(lines)

    def test_pricing_is_immutable(self):
        pricing = compute_pricing([(Decimal("1.00"), 1)])

        with pytest.raises(AttributeError):
            pricing.total = Decimal("0")


def test_round_money():
    assert round_money(Decimal("2.345")) == Decimal("2.35")
    assert round_money(Decimal("2.344")) == Decimal("2.34")
    assert round_money(Decimal("7")) == Decimal("7.00")
