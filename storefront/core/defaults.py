"""
Default injection for data coming from the backend.

The catalog API is loose about types: stock may arrive as a string, null or
be missing, prices may be floats, ids may be `_id` or `id`. Every coercion the
core relies on lives here so that it happens once, at the boundary.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .config import settings

ZERO = Decimal("0")

MIN_INTENSITY = 1
MAX_INTENSITY = 10


def coerce_stock(value: Any) -> int:
    """Stock count as a non-negative int; anything unusable is 0"""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return max(0, int(number))


def coerce_money(value: Any) -> Decimal:
    """Monetary amount as a non-negative Decimal; anything unusable is 0"""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            # str() first so 19.99 stays 19.99 instead of its binary expansion
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not amount.is_finite():
        return ZERO
    return max(ZERO, amount)


def coerce_intensity(value: Any, default: Optional[int] = None) -> int:
    """Intensity on the 1-10 scale, falling back to the configured default"""
    fallback = settings.default_intensity if default is None else default
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return fallback
    if number < MIN_INTENSITY:
        return fallback
    return min(number, MAX_INTENSITY)


def extract_id(value: Any) -> Optional[str]:
    """Pull an identifier out of a bare id, an embedded document or a model"""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        raw = value.get("_id") or value.get("id")
        return str(raw) if raw else None
    raw = getattr(value, "id", None)
    return str(raw) if raw else None
