"""Stock resolution"""

from typing import Optional

from ..core.defaults import coerce_stock
from ..models.product import Flavor, Product, Variant
from .selection import (
    FlavorSelection,
    PricedSelection,
    VariantSelection,
    resolve_selection,
)


def selection_stock(selection: PricedSelection) -> int:
    """Units available for a classified selection"""
    if isinstance(selection, FlavorSelection):
        if not selection.flavor.is_active:
            return 0
        return coerce_stock(selection.flavor.stock)

    if isinstance(selection, VariantSelection):
        return coerce_stock(selection.variant.stock)

    product = selection.product
    # Totals shown before the shopper picks a flavor or size
    if product.is_flavor_bearing:
        return sum(coerce_stock(f.stock) for f in product.active_flavors)
    if product.is_variant_bearing:
        return sum(coerce_stock(v.stock) for v in product.variants)

    if not product.has_stock:
        return 0
    return coerce_stock(product.stock)


def available_stock(
    product: Product,
    selected_variant: Optional[Variant] = None,
    selected_flavor: Optional[Flavor] = None,
) -> int:
    """Units available for a product and optional variant/flavor choice"""
    return selection_stock(resolve_selection(product, selected_variant, selected_flavor))


def is_out_of_stock(
    product: Product,
    selected_variant: Optional[Variant] = None,
    selected_flavor: Optional[Flavor] = None,
) -> bool:
    return available_stock(product, selected_variant, selected_flavor) <= 0
