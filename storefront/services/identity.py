"""Cart line identity"""

from typing import Any, Iterable, NamedTuple, Optional

from ..core.defaults import extract_id
from ..models.cart import CartLine


class LineKey(NamedTuple):
    """Product + variant + flavor; two lines with equal keys are the same line"""
    product_id: str
    variant_id: Optional[str] = None
    flavor_id: Optional[str] = None


def line_key(product_id: str, variant: Any = None, flavor: Any = None) -> LineKey:
    """Build a key from ids or variant/flavor snapshots"""
    return LineKey(product_id, extract_id(variant), extract_id(flavor))


def key_of(line: CartLine) -> LineKey:
    return LineKey(line.product_id, line.variant_id, line.flavor_id)


def find_line(
    lines: Iterable[CartLine],
    product_id: str,
    variant_id: Optional[str] = None,
    flavor_id: Optional[str] = None,
) -> Optional[CartLine]:
    """Find the line for an exact product/variant/flavor combination"""
    wanted = LineKey(product_id, variant_id, flavor_id)
    return next((line for line in lines if key_of(line) == wanted), None)
