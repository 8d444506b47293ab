"""Wishlist backed by the storefront API"""

import logging

import httpx

from ..core.session import AuthSession
from ..models.product import Product
from .storefront_client import StorefrontAPIError, StorefrontClient

logger = logging.getLogger(__name__)


class Wishlist:
    """The signed-in user's saved products"""

    def __init__(self, client: StorefrontClient, session: AuthSession):
        self.client = client
        self.session = session
        self.items: list[Product] = []
        self.loading = False

    @property
    def count(self) -> int:
        return len(self.items)

    def is_in_wishlist(self, product_id: str) -> bool:
        return any(p.id == product_id for p in self.items)

    async def fetch(self) -> list[Product]:
        """Load the wishlist; signed-out users have an empty one"""
        if not self.session.is_logged_in:
            self.items = []
            return self.items

        self.loading = True
        try:
            self.items = await self.client.get_wishlist()
        except (httpx.HTTPError, StorefrontAPIError) as e:
            logger.warning(f"Error fetching wishlist: {e}")
        finally:
            self.loading = False
        return self.items

    async def add(self, product_id: str) -> list[Product]:
        self.items = await self.client.add_to_wishlist(product_id)
        return self.items

    async def remove(self, product_id: str) -> list[Product]:
        self.items = await self.client.remove_from_wishlist(product_id)
        return self.items

    async def toggle(self, product: Product) -> bool:
        """Add or remove a product; returns whether it is now saved"""
        if self.is_in_wishlist(product.id):
            await self.remove(product.id)
        else:
            await self.add(product.id)
        return self.is_in_wishlist(product.id)
