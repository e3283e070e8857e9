"""Tests for cart totals and shipping tiers."""

from decimal import Decimal

import pytest

from gallery.services.cart import CartLineItem
from gallery.services.pricing import (
    ShippingPolicy,
    compute_shipping,
    compute_totals,
    line_total,
    quantize,
    to_minor_units,
)


def print_line(artwork_id=1, size="8x10", quantity=1, price="20"):
    return CartLineItem(
        artwork_id=artwork_id, type="print", print_size=size,
        quantity=quantity, unit_price=Decimal(price),
    )


def original_line(artwork_id=1, price="90"):
    return CartLineItem(artwork_id=artwork_id, type="original", unit_price=Decimal(price))


class TestComputeTotals:
    def test_prints_only_pay_print_rate(self):
        totals = compute_totals([print_line(quantity=2)])
        assert totals.subtotal == Decimal("40.00")
        assert totals.shipping_cost == Decimal("15.00")
        assert totals.total == Decimal("55.00")

    def test_original_pays_original_rate(self):
        totals = compute_totals([original_line()])
        assert totals.subtotal == Decimal("90.00")
        assert totals.shipping_cost == Decimal("25.00")
        assert totals.total == Decimal("115.00")

    def test_mixed_cart_uses_original_rate(self):
        totals = compute_totals([original_line(price="50"), print_line(artwork_id=2)])
        assert totals.subtotal == Decimal("70.00")
        assert totals.shipping_cost == Decimal("25.00")

    def test_free_shipping_above_threshold(self):
        totals = compute_totals([print_line(quantity=2, price="60")])
        assert totals.subtotal == Decimal("120.00")
        assert totals.shipping_cost == Decimal("0.00")
        assert totals.total == Decimal("120.00")

    def test_free_shipping_at_exact_threshold(self):
        totals = compute_totals([original_line(price="100")])
        assert totals.shipping_cost == Decimal("0.00")
        assert totals.total == Decimal("100.00")

    def test_just_below_threshold_pays_shipping(self):
        totals = compute_totals([original_line(price="99.99")])
        assert totals.shipping_cost == Decimal("25.00")
        assert totals.total == Decimal("124.99")

    def test_empty_cart_is_all_zero(self):
        totals = compute_totals([])
        assert totals.subtotal == Decimal("0.00")
        assert totals.shipping_cost == Decimal("0.00")
        assert totals.total == Decimal("0.00")

    @pytest.mark.parametrize(
        "lines",
        [
            [print_line(quantity=3, price="19.99")],
            [original_line(price="45.50"), print_line(artwork_id=2, quantity=2, price="12.25")],
            [print_line(quantity=10, price="10")],
        ],
    )
    def test_total_is_subtotal_plus_shipping(self, lines):
        totals = compute_totals(lines)
        assert totals.total == totals.subtotal + totals.shipping_cost

    def test_custom_policy(self):
        policy = ShippingPolicy(
            free_shipping_threshold=Decimal("50"),
            original_rate=Decimal("30"),
            print_rate=Decimal("5"),
        )
        assert compute_totals([print_line()], policy).shipping_cost == Decimal("5.00")
        assert compute_totals([print_line(quantity=3)], policy).shipping_cost == Decimal("0.00")

    def test_as_dict(self):
        totals = compute_totals([print_line()])
        assert totals.as_dict() == {
            "subtotal": Decimal("20.00"),
            "shipping_cost": Decimal("15.00"),
            "total": Decimal("35.00"),
        }


class TestHelpers:
    def test_quantize_rounds_half_up(self):
        assert quantize("19.995") == Decimal("20.00")
        assert quantize(1) == Decimal("1.00")

    def test_line_total(self):
        assert line_total("19.99", 3) == Decimal("59.97")

    def test_compute_shipping_tiers(self):
        policy = ShippingPolicy.from_settings()
        assert compute_shipping(Decimal("10"), True, policy) == Decimal("25.00")
        assert compute_shipping(Decimal("10"), False, policy) == Decimal("15.00")
        assert compute_shipping(Decimal("100"), True, policy) == Decimal("0.00")

    def test_to_minor_units(self):
        assert to_minor_units(Decimal("55")) == 5500
        assert to_minor_units("124.99") == 12499
        assert to_minor_units(Decimal("0")) == 0
