"""Deal countdown and expiry watching"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

import httpx
from pydantic import ValidationError

from ..core.clock import Clock, SystemClock, as_utc
from ..core.config import settings
from ..models.deal import Deal
from ..models.product import Flavor, Product, Variant
from .pricing import deal_applies
from .selection import resolve_selection
from .storefront_client import StorefrontAPIError, StorefrontClient

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600


@dataclass(frozen=True)
class TimeLeft:
    """Countdown to a deal's end"""
    total: float
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @property
    def expired(self) -> bool:
        return self.total <= 0


def time_left(end_date: Optional[datetime], now: datetime) -> TimeLeft:
    """Split the time until `end_date` into days/hours/minutes/seconds"""
    if end_date is None:
        return TimeLeft(total=float("inf"))

    remaining = (as_utc(end_date) - as_utc(now)).total_seconds()
    if remaining <= 0:
        return TimeLeft(total=0)

    whole = int(remaining)
    return TimeLeft(
        total=remaining,
        days=whole // SECONDS_PER_DAY,
        hours=(whole // SECONDS_PER_HOUR) % 24,
        minutes=(whole // 60) % 60,
        seconds=whole % 60,
    )


class DealWatcher:
    """
    Keeps the list of active deals fresh.

    Polls on a fixed interval; when a listed deal passes its end date the
    list is fetched again. The polling task belongs to whoever started it
    and must be stopped with `close()`.
    """

    def __init__(
        self,
        client: StorefrontClient,
        clock: Optional[Clock] = None,
        interval: Optional[float] = None,
        on_change: Optional[Callable[[list[Deal]], None]] = None,
    ):
        self.client = client
        self.clock = clock or SystemClock()
        self.interval = interval if interval is not None else settings.deal_poll_interval
        self.on_change = on_change
        self.deals: list[Deal] = []
        self._seen_expired: set[str] = set()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self) -> list[Deal]:
        """Fetch active deals; on failure the previous list is kept"""
        try:
            deals = await self.client.get_active_deals()
        except (httpx.HTTPError, StorefrontAPIError, ValidationError) as e:
            logger.error(f"Error fetching deals: {e}")
            return self.deals

        self.deals = deals
        now = self.clock.now()
        self._seen_expired = {d.id for d in deals if d.is_expired(now)}
        logger.debug(f"Loaded {len(deals)} active deals")

        if self.on_change:
            self.on_change(deals)
        return deals

    def running_deals(self) -> list[Deal]:
        now = self.clock.now()
        return [d for d in self.deals if d.is_running(now)]

    def newly_expired(self) -> list[Deal]:
        now = self.clock.now()
        return [d for d in self.deals if d.is_expired(now) and d.id not in self._seen_expired]

    def countdown(self, deal: Deal) -> TimeLeft:
        return time_left(deal.end_date, self.clock.now())

    def active_deal_for(
        self,
        product: Product,
        selected_variant: Optional[Variant] = None,
        selected_flavor: Optional[Flavor] = None,
    ) -> Optional[Deal]:
        """First running deal that discounts this selection"""
        selection = resolve_selection(product, selected_variant, selected_flavor)
        now = self.clock.now()
        return next((d for d in self.deals if deal_applies(d, selection, now)), None)

    async def check_once(self) -> bool:
        """Refresh if a deal expired since the last fetch; True if refreshed"""
        expired = self.newly_expired()
        if not expired:
            return False

        logger.info(f"Deal expired: {', '.join(d.title or d.id for d in expired)}")
        self._seen_expired.update(d.id for d in expired)
        await self.refresh()
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self.check_once()

    def start(self) -> None:
        """Start polling on the running event loop"""
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def close(self) -> None:
        """Stop polling"""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error(f"Deal polling stopped with an error: {e}")
