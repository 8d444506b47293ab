"""Order submission payloads"""

from typing import Iterable

from ..core.defaults import coerce_intensity
from ..models.cart import CartLine
from ..models.order import OrderItemRequest, OrderRequest, PaymentMethod


def build_order_item(line: CartLine) -> OrderItemRequest:
    return OrderItemRequest(
        product=line.product_id,
        quantity=line.quantity,
        selected_variant=line.selected_variant,
        selected_flavor=line.selected_flavor,
        intensity=coerce_intensity(line.intensity),
        price=line.unit_price,
    )


def build_order_payload(
    lines: Iterable[CartLine],
    payment_method: PaymentMethod = PaymentMethod.PAY_AT_PICKUP,
    notes: str = "",
) -> OrderRequest:
    """
    Convert a cart snapshot into the body of POST orders.

    Does not touch the cart; clearing it after a confirmed order is up to
    the caller.
    """
    return OrderRequest(
        items=[build_order_item(line) for line in lines],
        payment_method=payment_method,
        notes=notes,
    )
