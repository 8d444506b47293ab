"""Client-side cart storage"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import ValidationError

from ..core.clock import Clock, SystemClock
from ..core.config import settings
from ..models.cart import CartLine
from ..models.deal import Deal
from ..models.product import Flavor, Product, Variant
from ..storage.base import KeyValueStorage
from .identity import find_line, key_of, line_key
from .pricing import resolve_price
from .stock import available_stock

logger = logging.getLogger(__name__)


class CartError(str, Enum):
    """Reasons a cart operation was refused"""
    INVALID_QUANTITY = "invalid_quantity"
    PRODUCT_OUT_OF_STOCK = "product_out_of_stock"
    STOCK_UNAVAILABLE = "stock_unavailable"
    LINE_NOT_FOUND = "line_not_found"


@dataclass
class CartResult:
    """Outcome of a cart operation, shown to the shopper as-is"""
    success: bool
    error: Optional[CartError] = None
    available: Optional[int] = None
    line: Optional[CartLine] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, line: Optional[CartLine] = None, message: Optional[str] = None) -> "CartResult":
        return cls(success=True, line=line, message=message)

    @classmethod
    def failed(
        cls,
        error: CartError,
        message: str,
        available: Optional[int] = None,
        line: Optional[CartLine] = None,
    ) -> "CartResult":
        return cls(success=False, error=error, available=available, line=line, message=message)


def _copy(line: Optional[CartLine]) -> Optional[CartLine]:
    return line.model_copy(deep=True) if line is not None else None


class CartStore:
    """
    The shopper's cart.

    Owns the list of lines exclusively; readers get copies. Every mutation
    updates memory first and then persists, so a read right after a write
    sees the new state even if storage failed.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: Optional[str] = None,
        clock: Optional[Clock] = None,
    ):
        self.storage = storage
        self.storage_key = storage_key or settings.cart_storage_key
        self.clock = clock or SystemClock()
        self._lines: list[CartLine] = []
        self.hydrate()

    # ==================== Reads ====================

    @property
    def lines(self) -> list[CartLine]:
        return [line.model_copy(deep=True) for line in self._lines]

    @property
    def count(self) -> int:
        """Total units across all lines"""
        return sum(line.quantity for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get_line(
        self,
        product_id: str,
        selected_variant: Optional[Variant] = None,
        selected_flavor: Optional[Flavor] = None,
    ) -> Optional[CartLine]:
        """Get a copy of the line for a selection"""
        return _copy(self._find(product_id, selected_variant, selected_flavor))

    def _find(
        self,
        product_id: str,
        selected_variant: Optional[Variant],
        selected_flavor: Optional[Flavor],
    ) -> Optional[CartLine]:
        key = line_key(product_id, selected_variant, selected_flavor)
        return find_line(self._lines, *key)

    # ==================== Mutations ====================

    def add_to_cart(
        self,
        product: Product,
        quantity: int = 1,
        selected_variant: Optional[Variant] = None,
        selected_flavor: Optional[Flavor] = None,
        deal: Optional[Deal] = None,
    ) -> CartResult:
        """
        Add units of a product selection to the cart.

        Merges into the existing line for the same selection, otherwise
        appends a line priced now (deal discount locked in).
        """
        if quantity < 1:
            return CartResult.failed(CartError.INVALID_QUANTITY, "Quantity must be at least 1")

        if selected_variant is not None and not product.is_variant_bearing:
            # Not part of pricing or stock, so not part of the line identity either
            selected_variant = None

        available = available_stock(product, selected_variant, selected_flavor)
        if available <= 0:
            logger.info(f"Refused to add out-of-stock product {product.id}")
            return CartResult.failed(
                CartError.PRODUCT_OUT_OF_STOCK,
                f"{product.name} is out of stock",
                available=0,
            )

        existing = self._find(product.id, selected_variant, selected_flavor)
        current_quantity = existing.quantity if existing else 0

        if current_quantity + quantity > available:
            return CartResult.failed(
                CartError.STOCK_UNAVAILABLE,
                f"Only {available} available",
                available=available,
                line=_copy(existing),
            )

        if existing:
            existing.quantity += quantity
            existing.stock = available
            line = existing
        else:
            quote = resolve_price(
                product,
                selected_variant,
                selected_flavor,
                deal=deal,
                now=self.clock.now(),
            )
            line = CartLine(
                product_id=product.id,
                name=product.name,
                image=product.main_image,
                stock=available,
                has_stock=product.has_stock,
                selected_variant=selected_variant,
                selected_flavor=selected_flavor,
                quantity=quantity,
                base_price=quote.base_price,
                unit_price=quote.unit_price,
                deal=quote.deal.snapshot() if quote.deal else None,
                intensity=product.intensity,
            )
            self._lines.append(line)

        self.persist()
        return CartResult.ok(line=_copy(line), message=f"Added {quantity}x {line.display_name} to cart")

    def update_quantity(
        self,
        product_id: str,
        new_quantity: int,
        selected_variant: Optional[Variant] = None,
        selected_flavor: Optional[Flavor] = None,
        product: Optional[Product] = None,
    ) -> CartResult:
        """
        Set the quantity of a line.

        A quantity of zero or less removes the line. Pass the freshly fetched
        `product` to re-validate against live stock instead of the stock
        recorded on the line.
        """
        line = self._find(product_id, selected_variant, selected_flavor)
        if not line:
            return CartResult.failed(CartError.LINE_NOT_FOUND, "Item not in cart")

        if new_quantity <= 0:
            self._remove(line)
            self.persist()
            return CartResult.ok(message="Item removed")

        if product is not None:
            line.stock = available_stock(product, line.selected_variant, line.selected_flavor)
        available = line.stock

        if available <= 0:
            self._remove(line)
            self.persist()
            return CartResult.failed(
                CartError.PRODUCT_OUT_OF_STOCK,
                f"{line.display_name} is out of stock",
                available=0,
            )

        if new_quantity > available:
            line.quantity = available
            self.persist()
            return CartResult.failed(
                CartError.STOCK_UNAVAILABLE,
                f"Only {available} available",
                available=available,
                line=_copy(line),
            )

        line.quantity = new_quantity
        self.persist()
        return CartResult.ok(line=_copy(line), message="Cart updated")

    def remove_from_cart(
        self,
        product_id: str,
        selected_variant: Optional[Variant] = None,
        selected_flavor: Optional[Flavor] = None,
    ) -> CartResult:
        """Remove a line from the cart"""
        line = self._find(product_id, selected_variant, selected_flavor)
        if not line:
            return CartResult.failed(CartError.LINE_NOT_FOUND, "Item not in cart")

        self._remove(line)
        self.persist()
        return CartResult.ok(message="Item removed")

    def clear_cart(self) -> None:
        """Clear all items from cart"""
        self._lines = []
        self.persist()

    def _remove(self, line: CartLine) -> None:
        key = key_of(line)
        self._lines = [i for i in self._lines if key_of(i) != key]

    # ==================== Persistence ====================

    def persist(self) -> None:
        """Save the cart; failures are logged and the cart stays usable"""
        payload = json.dumps([line.to_wire() for line in self._lines])
        try:
            self.storage.set(self.storage_key, payload)
        except Exception as e:
            logger.error(f"Error saving cart to storage: {e}")

    def hydrate(self) -> None:
        """Load the cart saved by a previous session, or start empty"""
        self._lines = []

        try:
            raw = self.storage.get(self.storage_key)
        except Exception as e:
            logger.warning(f"Cart storage unavailable, starting with an empty cart: {e}")
            return

        if not raw:
            return

        try:
            entries = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Saved cart is not valid JSON, starting with an empty cart: {e}")
            return

        if not isinstance(entries, list):
            logger.warning("Saved cart is not a list, starting with an empty cart")
            return

        for entry in entries:
            try:
                line = CartLine.model_validate(entry)
            except ValidationError as e:
                logger.warning(f"Dropping unreadable cart line: {e}")
                continue

            existing = find_line(self._lines, *key_of(line))
            if existing:
                existing.quantity += line.quantity
            else:
                self._lines.append(line)

        logger.debug(f"Hydrated cart with {len(self._lines)} lines, {self.count} units")
