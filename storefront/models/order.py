"""Order models"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from ..core.defaults import coerce_money, extract_id
from .base import StorefrontModel
from .product import Flavor, Variant


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    # Orders are picked up in store and paid there
    PAY_AT_PICKUP = "pay_at_pickup"


class OrderItemRequest(StorefrontModel):
    """Line of an order submission"""
    product: str
    quantity: int = Field(gt=0)
    selected_variant: Optional[Variant] = Field(default=None, alias="selectedVariant")
    selected_flavor: Optional[Flavor] = Field(default=None, alias="selectedFlavor")
    intensity: int
    price: Decimal

    @field_validator("product", mode="before")
    @classmethod
    def product_reference_id(cls, value: Any) -> Optional[str]:
        return extract_id(value)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> Decimal:
        return coerce_money(value)


class OrderRequest(StorefrontModel):
    """Body of POST orders"""
    items: list[OrderItemRequest]
    payment_method: PaymentMethod = Field(default=PaymentMethod.PAY_AT_PICKUP, alias="paymentMethod")
    notes: str = ""


class OrderItem(OrderItemRequest):
    """Order line as returned by the backend"""
    name: Optional[str] = None
    intensity: Optional[int] = None
    price: Decimal = Decimal("0")


class Order(StorefrontModel):
    """Order created by the backend"""
    id: str = Field(alias="_id")
    items: list[OrderItem] = Field(default_factory=list)
    subtotal: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    total_amount: Decimal = Field(default=Decimal("0"), alias="totalAmount")
    status: OrderStatus = OrderStatus.PENDING
    payment_method: Optional[PaymentMethod] = Field(default=None, alias="paymentMethod")
    notes: str = ""
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("subtotal", "tax", "total_amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Decimal:
        return coerce_money(value)

    @field_validator("status", mode="before")
    @classmethod
    def lowercase_status(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value
