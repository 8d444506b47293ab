"""Catalog models"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import Field, field_validator

from ..core.defaults import coerce_money, coerce_stock, extract_id
from .base import StorefrontModel

SIZE_UNIT_SUFFIXES = {
    "grams": "g",
    "g": "g",
    "ounces": "oz",
    "oz": "oz",
}


class Size(StorefrontModel):
    """Size of a variant, e.g. 3.5 grams"""
    value: Optional[float] = None
    unit: str = ""

    @property
    def label(self) -> str:
        if self.value is None:
            return self.unit
        amount = f"{self.value:g}"
        suffix = SIZE_UNIT_SUFFIXES.get(self.unit.lower())
        if suffix:
            return f"{amount}{suffix}"
        return f"{amount} {self.unit}".strip()


class Variant(StorefrontModel):
    """Sized SKU of a product"""
    id: str = Field(alias="_id")
    size: Optional[Size] = None
    price: Decimal = Decimal("0")
    stock: int = 0

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> Decimal:
        return coerce_money(value)

    @field_validator("stock", mode="before")
    @classmethod
    def coerce_stock_count(cls, value: Any) -> int:
        return coerce_stock(value)


class Flavor(StorefrontModel):
    """Flavored SKU of a product"""
    id: str = Field(alias="_id")
    name: str = ""
    price: Decimal = Decimal("0")
    stock: int = 0
    is_active: bool = Field(default=True, alias="isActive")

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> Decimal:
        return coerce_money(value)

    @field_validator("stock", mode="before")
    @classmethod
    def coerce_stock_count(cls, value: Any) -> int:
        return coerce_stock(value)


class Category(StorefrontModel):
    """Product category"""
    id: str = Field(alias="_id")
    name: str = ""


class Product(StorefrontModel):
    """Product in the catalog"""
    id: str = Field(alias="_id")
    name: str
    description: str = ""
    price: Decimal = Decimal("0")
    stock: int = 0
    has_stock: bool = Field(default=True, alias="hasStock")
    variants: list[Variant] = Field(default_factory=list)
    flavors: list[Flavor] = Field(default_factory=list)
    category: Optional[Category] = None
    intensity: Optional[int] = None
    review_tags: list[str] = Field(default_factory=list, alias="reviewTags")
    images: list[str] = Field(default_factory=list)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> Decimal:
        return coerce_money(value)

    @field_validator("stock", mode="before")
    @classmethod
    def coerce_stock_count(cls, value: Any) -> int:
        return coerce_stock(value)

    @field_validator("variants", "flavors", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("category", mode="before")
    @classmethod
    def category_reference(cls, value: Any) -> Any:
        # Unpopulated references arrive as a bare id
        if isinstance(value, str):
            return {"_id": value}
        return value

    @field_validator("intensity", mode="before")
    @classmethod
    def loose_intensity(cls, value: Any) -> Optional[int]:
        try:
            return int(float(value)) if value is not None else None
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("review_tags", mode="before")
    @classmethod
    def review_tag_ids(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [tag for tag in (extract_id(v) for v in value) if tag]

    @field_validator("images", mode="before")
    @classmethod
    def image_urls(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [img.get("url", "") if isinstance(img, dict) else img for img in value]

    @property
    def is_variant_bearing(self) -> bool:
        return bool(self.variants)

    @property
    def is_flavor_bearing(self) -> bool:
        return bool(self.flavors)

    @property
    def active_flavors(self) -> list[Flavor]:
        return [f for f in self.flavors if f.is_active]

    @property
    def main_image(self) -> Optional[str]:
        return self.images[0] if self.images else None

    def find_variant(self, variant_id: str) -> Optional[Variant]:
        return next((v for v in self.variants if v.id == variant_id), None)

    def find_flavor(self, flavor_id: str) -> Optional[Flavor]:
        return next((f for f in self.flavors if f.id == flavor_id), None)
