"""Wishlist storage for the mock backend"""

from storefront.models.product import Product

from .products import ProductDatabase


class WishlistDatabase:
    """Single in-memory wishlist, ordered by time added"""

    def __init__(self, products: ProductDatabase):
        self.products = products
        self.product_ids: list[str] = []

    def reset(self) -> None:
        self.product_ids = []

    def items(self) -> list[Product]:
        return [p for p in (self.products.get_product(pid) for pid in self.product_ids) if p]

    def add(self, product_id: str) -> bool:
        if not self.products.get_product(product_id):
            return False
        if product_id not in self.product_ids:
            self.product_ids.append(product_id)
        return True

    def remove(self, product_id: str) -> None:
        self.product_ids = [pid for pid in self.product_ids if pid != product_id]
