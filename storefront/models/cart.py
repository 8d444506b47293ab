"""Cart models"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import Field, field_validator

from ..core.defaults import coerce_money, coerce_stock
from .base import StorefrontModel
from .deal import DealSnapshot
from .product import Flavor, Variant


class CartLine(StorefrontModel):
    """
    One row of the cart: a product selection and its quantity.

    `stock` is the available count for this exact selection as resolved when
    the line was added (or last re-validated). `unit_price` is locked in at
    add time, discount included, so a deal expiring later does not change
    lines already in the cart.
    """
    product_id: str = Field(alias="productId")
    name: str = ""
    image: Optional[str] = None
    stock: int = 0
    has_stock: bool = Field(default=True, alias="hasStock")
    selected_variant: Optional[Variant] = Field(default=None, alias="selectedVariant")
    selected_flavor: Optional[Flavor] = Field(default=None, alias="selectedFlavor")
    quantity: int = Field(gt=0)
    base_price: Decimal = Field(default=Decimal("0"), alias="basePrice")
    unit_price: Decimal = Field(alias="unitPrice")
    deal: Optional[DealSnapshot] = None
    intensity: Optional[int] = None

    @field_validator("base_price", "unit_price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> Decimal:
        return coerce_money(value)

    @field_validator("stock", mode="before")
    @classmethod
    def coerce_stock_count(cls, value: Any) -> int:
        return coerce_stock(value)

    @property
    def variant_id(self) -> Optional[str]:
        return self.selected_variant.id if self.selected_variant else None

    @property
    def flavor_id(self) -> Optional[str]:
        return self.selected_flavor.id if self.selected_flavor else None

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def is_discounted(self) -> bool:
        return self.deal is not None and self.unit_price < self.base_price

    @property
    def display_name(self) -> str:
        if self.selected_flavor:
            return f"{self.name} - {self.selected_flavor.name}"
        if self.selected_variant and self.selected_variant.size:
            return f"{self.name} ({self.selected_variant.size.label})"
        return self.name
