"""Order submission flow"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx
from pydantic import ValidationError

from ..models.order import Order, PaymentMethod
from .cart_store import CartStore
from .order_builder import build_order_payload
from .storefront_client import StorefrontAPIError, StorefrontClient, describe_error

logger = logging.getLogger(__name__)

UNCONFIRMED_ORDER_MESSAGE = (
    "Your order may have been placed but could not be confirmed. "
    "Check your orders before submitting again."
)


class OrderState(str, Enum):
    """Where the shopper is in the checkout"""
    CART_EMPTY = "cart_empty"
    CART_NONEMPTY = "cart_nonempty"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class OrderSubmission:
    """Result of submitting the cart as an order"""
    success: bool
    order: Optional[Order] = None
    error_message: Optional[str] = None

    @property
    def order_id(self) -> Optional[str]:
        return self.order.id if self.order else None


class OrderFlow:
    """
    Turns the cart into a pick-up order.

    CART_NONEMPTY -> SUBMITTING -> CONFIRMED | FAILED. A failed submission
    keeps the cart so the shopper can submit again; nothing is retried
    automatically. A confirmed order clears the cart.
    """

    def __init__(
        self,
        cart: CartStore,
        client: StorefrontClient,
        payment_method: PaymentMethod = PaymentMethod.PAY_AT_PICKUP,
    ):
        self.cart = cart
        self.client = client
        self.payment_method = payment_method
        self.last_order: Optional[Order] = None
        self.last_error: Optional[str] = None
        self._submitting = False
        self._outcome: Optional[OrderState] = None

    @property
    def state(self) -> OrderState:
        if self._submitting:
            return OrderState.SUBMITTING
        if self._outcome == OrderState.CONFIRMED and self.cart.is_empty:
            return OrderState.CONFIRMED
        if self._outcome == OrderState.FAILED and not self.cart.is_empty:
            return OrderState.FAILED
        return OrderState.CART_EMPTY if self.cart.is_empty else OrderState.CART_NONEMPTY

    async def submit(self, notes: str = "") -> OrderSubmission:
        """Submit the current cart"""
        if self._submitting:
            return OrderSubmission(success=False, error_message="Order submission already in progress")

        lines = self.cart.lines
        if not lines:
            return OrderSubmission(success=False, error_message="Your cart is empty")

        payload = build_order_payload(lines, payment_method=self.payment_method, notes=notes)

        self._submitting = True
        try:
            order = await self.client.create_order(payload)
        except ValidationError as e:
            # The backend accepted the order but its reply could not be read
            logger.error(f"Unreadable order confirmation: {e}")
            return self._failed(UNCONFIRMED_ORDER_MESSAGE)
        except (httpx.HTTPError, StorefrontAPIError) as e:
            message = describe_error(e)
            logger.error(f"Order submission failed: {message}")
            return self._failed(message)
        finally:
            self._submitting = False

        self.cart.clear_cart()
        self._outcome = OrderState.CONFIRMED
        self.last_order = order
        self.last_error = None

        logger.info(f"Order {order.id} created: ${order.total_amount} ({len(order.items)} items)")
        return OrderSubmission(success=True, order=order)

    def _failed(self, message: str) -> OrderSubmission:
        self._outcome = OrderState.FAILED
        self.last_error = message
        return OrderSubmission(success=False, error_message=message)

    async def load_confirmation(self, order_id: str) -> Order:
        """Fetch the order shown on the confirmation view"""
        return await self.client.get_order(order_id)
