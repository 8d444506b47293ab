"""
Storefront composition root.

Builds the client-side stores and wires them together. Views receive the
`Storefront` instance (or the individual stores) instead of reaching for
globals.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .core.clock import Clock, SystemClock
from .core.config import settings
from .core.session import AuthSession
from .services.cart_store import CartStore
from .services.checkout import CheckoutTotals, calculate_totals
from .services.deals import DealWatcher
from .services.order_flow import OrderFlow
from .services.preferences import Preferences
from .services.storefront_client import StorefrontClient
from .services.wishlist import Wishlist
from .storage import FileStorage, KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)


@dataclass
class Storefront:
    """Everything a storefront view needs"""
    storage: KeyValueStorage
    session: AuthSession
    client: StorefrontClient
    cart: CartStore
    orders: OrderFlow
    deals: DealWatcher
    wishlist: Wishlist
    preferences: Preferences

    def totals(self) -> CheckoutTotals:
        return calculate_totals(self.cart.lines)

    async def close(self) -> None:
        """Tear down timers and connections"""
        await self.deals.close()
        await self.client.close()


def default_storage() -> KeyValueStorage:
    if settings.persistent_storage_configured:
        return FileStorage(settings.storage_dir)
    return MemoryStorage()


def create_storefront(
    storage: Optional[KeyValueStorage] = None,
    clock: Optional[Clock] = None,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Storefront:
    """Create the stores for one shopper"""
    storage = storage if storage is not None else default_storage()
    clock = clock or SystemClock()

    session = AuthSession(storage)
    client = StorefrontClient(
        base_url=base_url,
        token_provider=session.get_token,
        transport=transport,
    )
    cart = CartStore(storage, clock=clock)

    logger.info(f"{settings.app_name} ready: API {client.base_url}, {cart.count} units in cart")

    return Storefront(
        storage=storage,
        session=session,
        client=client,
        cart=cart,
        orders=OrderFlow(cart, client),
        deals=DealWatcher(client, clock=clock),
        wishlist=Wishlist(client, session),
        preferences=Preferences(storage, clock=clock),
    )
