# Storefront Services

from .selection import (
    SimpleSelection,
    VariantSelection,
    FlavorSelection,
    PricedSelection,
    resolve_selection,
)
from .stock import available_stock, is_out_of_stock
from .pricing import (
    PriceQuote,
    apply_deal,
    deal_applies,
    format_money,
    resolve_price,
    round_money,
    unit_price,
)
from .identity import LineKey, find_line, line_key
from .cart_store import CartStore, CartResult, CartError
from .checkout import CheckoutTotals, calculate_totals, TAX_RATE
from .order_builder import build_order_payload
from .storefront_client import StorefrontClient, StorefrontAPIError
from .order_flow import OrderFlow, OrderState, OrderSubmission
from .deals import DealWatcher, TimeLeft, time_left
from .preferences import Preferences
from .wishlist import Wishlist

__all__ = [
    "SimpleSelection",
    "VariantSelection",
    "FlavorSelection",
    "PricedSelection",
    "resolve_selection",
    "available_stock",
    "is_out_of_stock",
    "PriceQuote",
    "apply_deal",
    "deal_applies",
    "format_money",
    "resolve_price",
    "round_money",
    "unit_price",
    "LineKey",
    "find_line",
    "line_key",
    "CartStore",
    "CartResult",
    "CartError",
    "CheckoutTotals",
    "calculate_totals",
    "TAX_RATE",
    "build_order_payload",
    "StorefrontClient",
    "StorefrontAPIError",
    "OrderFlow",
    "OrderState",
    "OrderSubmission",
    "DealWatcher",
    "TimeLeft",
    "time_left",
    "Preferences",
    "Wishlist",
]
