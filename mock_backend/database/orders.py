"""Order storage for the mock backend"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from storefront.core.config import settings
from storefront.models.order import Order, OrderItem, OrderRequest, OrderStatus

from .products import ProductDatabase


class InsufficientStock(Exception):
    """An order line asks for more than is on the shelf"""

    def __init__(self, name: str, available: int):
        self.name = name
        self.available = available
        super().__init__(f"Insufficient stock for {name}. Available: {available}")


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self, products: ProductDatabase, tax_rate: Optional[float] = None):
        self.products = products
        self.tax_rate = Decimal(str(settings.tax_rate if tax_rate is None else tax_rate))
        self.orders: dict[str, Order] = {}

    def reset(self) -> None:
        self.orders = {}

    def create_order(self, request: OrderRequest) -> Order:
        """Reserve stock and record an order; raises InsufficientStock"""
        # Lines drawing on the same stock are checked against their combined quantity
        requested: dict[tuple, int] = {}
        for item in request.items:
            key = self.products.stock_key(item)
            requested[key] = requested.get(key, 0) + item.quantity

        order_items = []
        for item in request.items:
            product = self.products.get_product(item.product)
            name = product.name if product else item.product
            available = self.products.stock_for(item)
            if available < requested[self.products.stock_key(item)]:
                raise InsufficientStock(name, available)
            order_items.append(OrderItem(**item.model_dump(), name=name))

        for item, order_item in zip(request.items, order_items):
            if not self.products.update_stock(item, -item.quantity):
                raise InsufficientStock(order_item.name, self.products.stock_for(item))

        subtotal = sum((item.price * item.quantity for item in order_items), Decimal("0"))
        tax = subtotal * self.tax_rate
        now = datetime.now(timezone.utc)

        order = Order(
            id=f"ORD-{uuid.uuid4().hex[:8].upper()}",
            items=order_items,
            subtotal=subtotal,
            tax=tax,
            total_amount=subtotal + tax,
            status=OrderStatus.PENDING,
            payment_method=request.payment_method,
            notes=request.notes,
            created_at=now,
            updated_at=now,
        )

        self.orders[order.id] = order
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def list_orders(self, limit: int = 50) -> list[Order]:
        """List recent orders"""
        orders = list(self.orders.values())
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders[:limit]
