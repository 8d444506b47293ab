"""Tests for checkout totals"""

from decimal import Decimal

from storefront.models import CartLine
from storefront.services.checkout import calculate_totals


def line(product_id, unit_price, quantity):
    return CartLine(product_id=product_id, name=product_id, unit_price=unit_price, quantity=quantity, stock=10)


def test_totals_at_full_precision():
    totals = calculate_totals([line("a", "19.99", 2), line("b", "5.00", 1)])

    assert totals.subtotal == Decimal("44.98")
    assert totals.tax == Decimal("3.1486")
    assert totals.grand_total == Decimal("48.1286")
    assert totals.item_count == 3


def test_totals_display_rounds_only_at_the_end():
    totals = calculate_totals([line("a", "19.99", 2), line("b", "5.00", 1)])

    assert totals.display() == {"subtotal": "$44.98", "tax": "$3.15", "grand_total": "$48.13"}
    assert totals.rounded().grand_total == Decimal("48.13")


def test_unit_prices_are_not_rounded_before_multiplying():
    totals = calculate_totals([line("a", "15.992", 3)])

    assert totals.subtotal == Decimal("47.976")
    assert totals.display()["subtotal"] == "$47.98"


def test_empty_cart():
    totals = calculate_totals([])

    assert totals.subtotal == 0
    assert totals.grand_total == 0
    assert totals.item_count == 0
    assert totals.display()["grand_total"] == "$0.00"


def test_custom_tax_rate():
    totals = calculate_totals([line("a", "100", 1)], tax_rate="0.1")

    assert totals.tax == Decimal("10.0")
    assert totals.grand_total == Decimal("110.0")
