# Storefront Models

from .base import StorefrontModel
from .product import Product, Variant, Flavor, Size, Category
from .deal import Deal, DealItem, DealSnapshot, DiscountType
from .cart import CartLine
from .order import (
    Order,
    OrderItem,
    OrderItemRequest,
    OrderRequest,
    OrderStatus,
    PaymentMethod,
)

__all__ = [
    "StorefrontModel",
    "Product",
    "Variant",
    "Flavor",
    "Size",
    "Category",
    "Deal",
    "DealItem",
    "DealSnapshot",
    "DiscountType",
    "CartLine",
    "Order",
    "OrderItem",
    "OrderItemRequest",
    "OrderRequest",
    "OrderStatus",
    "PaymentMethod",
]
