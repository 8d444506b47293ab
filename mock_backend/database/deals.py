"""Mock deal database"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from storefront.core.clock import Clock, SystemClock
from storefront.models.deal import Deal, DealItem, DiscountType


def _seed(now: datetime) -> dict[str, Deal]:
    deals = [
        Deal(
            id="deal-001",
            title="Weekend Flash Sale",
            description="20% off the 3.5g Golden Teacher and Mint chocolate.",
            discount_type=DiscountType.PERCENTAGE,
            discount_percentage="20",
            deal_items=[
                DealItem(product_id="prod-001", variant_id="var-001-35"),
                DealItem(product_id="prod-002", flavor_id="flv-002-mint"),
            ],
            start_date=now - timedelta(days=1),
            end_date=now + timedelta(days=2),
        ),
        Deal(
            id="deal-002",
            title="Capsule Week",
            description="$5 off every capsule bottle.",
            discount_type=DiscountType.FIXED,
            discount_amount="5",
            product_ids=["prod-003", "prod-005"],
            start_date=now - timedelta(days=3),
            end_date=now + timedelta(days=4),
        ),
        Deal(
            id="deal-003",
            title="Last Month's Special",
            discount_type=DiscountType.PERCENTAGE,
            discount_percentage="50",
            product_ids=["prod-003"],
            start_date=now - timedelta(days=40),
            end_date=now - timedelta(days=10),
        ),
    ]
    return {d.id: d for d in deals}


class DealDatabase:
    """In-memory deal storage"""

    def __init__(self, clock: Optional[Clock] = None):
        self.reset(clock)

    def reset(self, clock: Optional[Clock] = None) -> None:
        """Reseed deals relative to the clock's current time"""
        self.clock = clock or SystemClock()
        self.deals = _seed(self.clock.now())
        self.banner_ids = ["deal-001"]

    def get_deal(self, deal_id: str) -> Optional[Deal]:
        return self.deals.get(deal_id)

    def active_deals(self, now: Optional[datetime] = None) -> list[Deal]:
        """Deals running right now, soonest to end first"""
        now = now or self.clock.now()
        running = [d for d in self.deals.values() if d.is_running(now)]
        running.sort(key=lambda d: d.end_date or datetime.max.replace(tzinfo=timezone.utc))
        return running

    def banner_deals(self, now: Optional[datetime] = None) -> list[Deal]:
        return [d for d in self.active_deals(now) if d.id in self.banner_ids]


# Singleton instance
deal_db = DealDatabase()
