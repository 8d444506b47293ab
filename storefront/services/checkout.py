"""Checkout totals"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Union

from ..core.config import settings
from ..core.defaults import ZERO
from ..models.cart import CartLine
from .pricing import format_money, round_money

TAX_RATE = Decimal(str(settings.tax_rate))


@dataclass(frozen=True)
class CheckoutTotals:
    """Bill summary at full precision"""
    subtotal: Decimal
    tax: Decimal
    grand_total: Decimal
    item_count: int

    def rounded(self) -> "CheckoutTotals":
        return CheckoutTotals(
            subtotal=round_money(self.subtotal),
            tax=round_money(self.tax),
            grand_total=round_money(self.grand_total),
            item_count=self.item_count,
        )

    def display(self) -> dict[str, str]:
        return {
            "subtotal": format_money(self.subtotal),
            "tax": format_money(self.tax),
            "grand_total": format_money(self.grand_total),
        }


def calculate_totals(
    lines: Iterable[CartLine],
    tax_rate: Optional[Union[Decimal, float, str]] = None,
) -> CheckoutTotals:
    """
    Compute subtotal, tax and grand total for a cart snapshot.

    Nothing is cached; call it again whenever the cart may have changed.
    """
    rate = TAX_RATE if tax_rate is None else Decimal(str(tax_rate))

    subtotal = ZERO
    item_count = 0
    for line in lines:
        subtotal += line.unit_price * line.quantity
        item_count += line.quantity

    tax = subtotal * rate
    return CheckoutTotals(
        subtotal=subtotal,
        tax=tax,
        grand_total=subtotal + tax,
        item_count=item_count,
    )
