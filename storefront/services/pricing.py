"""
Price resolution.

Internal arithmetic is done on Decimal at full precision. Rounding to cents
happens only through `round_money` / `format_money`, at display time or when
an aggregate is shown, never per unit before multiplying by quantity.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from ..core.config import settings
from ..core.defaults import ZERO, coerce_money
from ..models.deal import Deal, DiscountType
from ..models.product import Flavor, Product, Variant
from .selection import (
    FlavorSelection,
    PricedSelection,
    VariantSelection,
    resolve_selection,
    selection_ids,
)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class PriceQuote:
    """Resolved price of a selection"""
    base_price: Decimal
    unit_price: Decimal
    deal: Optional[Deal] = None

    @property
    def discounted(self) -> bool:
        return self.deal is not None and self.unit_price < self.base_price

    @property
    def savings(self) -> Decimal:
        return self.base_price - self.unit_price


def round_money(value: Any) -> Decimal:
    """Round to the configured number of places, half up"""
    quantum = Decimal(1).scaleb(-settings.money_places)
    return coerce_money(value).quantize(quantum, rounding=ROUND_HALF_UP)


def format_money(value: Any) -> str:
    return f"{settings.currency_symbol}{round_money(value)}"


def selection_price(selection: PricedSelection) -> Decimal:
    """Undiscounted unit price of a classified selection"""
    if isinstance(selection, FlavorSelection):
        return coerce_money(selection.flavor.price)
    if isinstance(selection, VariantSelection):
        return coerce_money(selection.variant.price)
    return coerce_money(selection.product.price)


def apply_deal(price: Decimal, deal: Deal) -> Decimal:
    """Apply a deal's discount to a unit price, never going below zero"""
    price = coerce_money(price)
    if deal.discount_type == DiscountType.PERCENTAGE:
        discounted = price - price * deal.discount_percentage / HUNDRED
    else:
        discounted = price - deal.discount_amount
    return max(ZERO, discounted)


def deal_applies(
    deal: Deal,
    selection: PricedSelection,
    now: Optional[datetime] = None,
) -> bool:
    """
    Check whether a deal discounts this selection.

    Without `now` only coverage is checked; with it the deal must also be
    running (started, not expired, active).
    """
    if now is not None and not deal.is_running(now):
        return False
    variant_id, flavor_id = selection_ids(selection)
    return deal.covers(selection.product.id, variant_id=variant_id, flavor_id=flavor_id)


def resolve_price(
    product: Product,
    selected_variant: Optional[Variant] = None,
    selected_flavor: Optional[Flavor] = None,
    deal: Optional[Deal] = None,
    now: Optional[datetime] = None,
) -> PriceQuote:
    """Resolve base and discounted unit price for a product selection"""
    selection = resolve_selection(product, selected_variant, selected_flavor)
    base_price = selection_price(selection)

    if deal is not None and deal_applies(deal, selection, now):
        return PriceQuote(base_price=base_price, unit_price=apply_deal(base_price, deal), deal=deal)

    return PriceQuote(base_price=base_price, unit_price=base_price)


def unit_price(
    product: Product,
    selected_variant: Optional[Variant] = None,
    selected_flavor: Optional[Flavor] = None,
    deal: Optional[Deal] = None,
    now: Optional[datetime] = None,
) -> Decimal:
    """Unit price after any applicable deal"""
    return resolve_price(product, selected_variant, selected_flavor, deal, now).unit_price
