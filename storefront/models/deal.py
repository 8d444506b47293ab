"""Deal models"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from ..core.clock import as_utc
from ..core.defaults import coerce_money, extract_id
from .base import StorefrontModel


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


def discount_label(discount_type: DiscountType, percentage: Decimal, amount: Decimal) -> str:
    """Short badge text such as `20%` or `$5`"""
    if discount_type == DiscountType.PERCENTAGE:
        return f"{percentage.normalize():f}%"
    return f"${amount.normalize():f}"


class DealItem(StorefrontModel):
    """One product/variant/flavor combination covered by a deal"""
    product_id: str = Field(alias="product")
    variant_id: Optional[str] = Field(default=None, alias="variantId")
    flavor_id: Optional[str] = Field(default=None, alias="flavorId")

    @field_validator("product_id", "variant_id", "flavor_id", mode="before")
    @classmethod
    def reference_id(cls, value: Any) -> Optional[str]:
        return extract_id(value)


class Deal(StorefrontModel):
    """
    Time-boxed discount overlay.

    A deal either lists explicit `deal_items`, in which case only those exact
    variants/flavors are discounted, or only a product set, in which case
    every selection of those products is.
    """
    id: str = Field(alias="_id")
    title: str = ""
    description: Optional[str] = None
    discount_type: DiscountType = Field(default=DiscountType.PERCENTAGE, alias="discountType")
    discount_percentage: Decimal = Field(default=Decimal("0"), alias="discountPercentage")
    discount_amount: Decimal = Field(default=Decimal("0"), alias="discountAmount")
    product_ids: list[str] = Field(default_factory=list, alias="products")
    deal_items: list[DealItem] = Field(default_factory=list, alias="dealItems")
    start_date: Optional[datetime] = Field(default=None, alias="startDate")
    end_date: Optional[datetime] = Field(default=None, alias="endDate")
    is_active: bool = Field(default=True, alias="isActive")

    @field_validator("discount_type", mode="before")
    @classmethod
    def normalize_discount_type(cls, value: Any) -> DiscountType:
        if isinstance(value, DiscountType):
            return value
        # Anything that is not a percentage is a fixed amount off
        if str(value).lower() in ("percentage", "percent"):
            return DiscountType.PERCENTAGE
        return DiscountType.FIXED

    @field_validator("discount_percentage", "discount_amount", mode="before")
    @classmethod
    def coerce_discount(cls, value: Any) -> Decimal:
        return coerce_money(value)

    @field_validator("product_ids", mode="before")
    @classmethod
    def product_reference_ids(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [pid for pid in (extract_id(v) for v in value) if pid]

    @field_validator("deal_items", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("start_date", "end_date", mode="after")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None

    @property
    def label(self) -> str:
        return discount_label(self.discount_type, self.discount_percentage, self.discount_amount)

    def is_expired(self, now: datetime) -> bool:
        return self.end_date is not None and as_utc(now) > self.end_date

    def has_started(self, now: datetime) -> bool:
        return self.start_date is None or as_utc(now) >= self.start_date

    def is_running(self, now: datetime) -> bool:
        return self.is_active and self.has_started(now) and not self.is_expired(now)

    def covers(
        self,
        product_id: str,
        variant_id: Optional[str] = None,
        flavor_id: Optional[str] = None,
    ) -> bool:
        """Check whether the given selection is discounted by this deal"""
        if not self.deal_items:
            return product_id in self.product_ids

        for item in self.deal_items:
            if item.product_id != product_id:
                continue
            if flavor_id is not None:
                if item.flavor_id == flavor_id:
                    return True
            elif variant_id is not None:
                if item.variant_id == variant_id:
                    return True
            elif item.variant_id is None and item.flavor_id is None:
                return True
        return False

    def snapshot(self) -> "DealSnapshot":
        return DealSnapshot(
            deal_id=self.id,
            title=self.title,
            discount_type=self.discount_type,
            discount_percentage=self.discount_percentage,
            discount_amount=self.discount_amount,
        )


class DealSnapshot(StorefrontModel):
    """Deal terms recorded on a cart line when its price was locked in"""
    deal_id: str = Field(alias="dealId")
    title: str = ""
    discount_type: DiscountType = Field(alias="discountType")
    discount_percentage: Decimal = Field(default=Decimal("0"), alias="discountPercentage")
    discount_amount: Decimal = Field(default=Decimal("0"), alias="discountAmount")

    @property
    def label(self) -> str:
        return discount_label(self.discount_type, self.discount_percentage, self.discount_amount)
