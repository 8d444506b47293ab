"""
Priced selections.

A shopper's choice on a product page is one of three shapes: the plain
product, one of its sized variants, or one of its flavors. Stock, price and
deal matching all dispatch on this shape instead of re-checking optional
fields, so the precedence (flavor, then variant, then base product) is
decided in exactly one place.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..models.product import Flavor, Product, Variant


@dataclass(frozen=True)
class SimpleSelection:
    """Nothing selected: base price and aggregate stock apply"""
    product: Product


@dataclass(frozen=True)
class VariantSelection:
    product: Product
    variant: Variant


@dataclass(frozen=True)
class FlavorSelection:
    product: Product
    flavor: Flavor


PricedSelection = Union[SimpleSelection, VariantSelection, FlavorSelection]


def resolve_selection(
    product: Product,
    selected_variant: Optional[Variant] = None,
    selected_flavor: Optional[Flavor] = None,
) -> PricedSelection:
    """
    Classify a selection.

    A flavor wins over a variant when both are chosen. A variant only counts
    when the product declares variants. The product's own copy of the
    variant/flavor is preferred so that a fresh product re-validates a stale
    snapshot taken from the cart.
    """
    if selected_flavor is not None:
        flavor = product.find_flavor(selected_flavor.id) or selected_flavor
        return FlavorSelection(product=product, flavor=flavor)

    if selected_variant is not None and product.is_variant_bearing:
        variant = product.find_variant(selected_variant.id) or selected_variant
        return VariantSelection(product=product, variant=variant)

    return SimpleSelection(product=product)


def selection_ids(selection: PricedSelection) -> tuple[Optional[str], Optional[str]]:
    """(variant id, flavor id) that identify the selection for deal matching"""
    if isinstance(selection, FlavorSelection):
        return None, selection.flavor.id
    if isinstance(selection, VariantSelection):
        return selection.variant.id, None
    return None, None
