"""Mock product database"""

from typing import Optional

from storefront.models.order import OrderItemRequest
from storefront.models.product import Category, Flavor, Product, Size, Variant
from storefront.services.stock import available_stock

FLOWER = Category(id="cat-flower", name="Flower")
EDIBLES = Category(id="cat-edibles", name="Edibles")
CAPSULES = Category(id="cat-capsules", name="Capsules")


def _seed() -> dict[str, Product]:
    products = [
        Product(
            id="prod-001",
            name="Golden Teacher",
            description="Classic strain, sold by weight.",
            price="25.00",
            category=FLOWER,
            intensity=6,
            images=["/images/golden-teacher.png"],
            variants=[
                Variant(id="var-001-35", size=Size(value=3.5, unit="grams"), price="25.00", stock=4),
                Variant(id="var-001-7", size=Size(value=7, unit="grams"), price="45.00", stock=2),
                Variant(id="var-001-14", size=Size(value=14, unit="grams"), price="80.00", stock=0),
            ],
        ),
        Product(
            id="prod-002",
            name="Mush Love Chocolate",
            description="Dark chocolate bar in four flavors.",
            price="20.00",
            category=EDIBLES,
            intensity=4,
            images=["/images/mush-love.png"],
            flavors=[
                Flavor(id="flv-002-mint", name="Mint", price="20.00", stock=10),
                Flavor(id="flv-002-orange", name="Orange", price="22.00", stock=3),
                Flavor(id="flv-002-sea-salt", name="Sea Salt", price="20.00", stock=0),
                Flavor(id="flv-002-chili", name="Chili", price="24.00", stock=5, is_active=False),
            ],
        ),
        Product(
            id="prod-003",
            name="Lion's Mane Capsules",
            description="60 capsules per bottle.",
            price="50.00",
            stock=12,
            category=CAPSULES,
            images=["/images/lions-mane.png"],
        ),
        Product(
            id="prod-004",
            name="Reishi Capsules",
            description="Temporarily unavailable.",
            price="35.00",
            stock=8,
            has_stock=False,
            category=CAPSULES,
            intensity=2,
        ),
        Product(
            id="prod-005",
            name="Cordyceps Capsules",
            description="30 capsules per bottle.",
            price="30.00",
            stock=20,
            category=CAPSULES,
            intensity=3,
        ),
    ]
    return {p.id: p for p in products}


class ProductDatabase:
    """In-memory product database for the mock backend"""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Restore the seeded catalog"""
        self.products = _seed()

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def list_products(self, category: Optional[str] = None) -> list[Product]:
        """List products, optionally filtered by category id"""
        results = list(self.products.values())
        if category:
            results = [p for p in results if p.category and p.category.id == category]
        return results

    def related_products(self, product_id: str, limit: int = 4) -> list[Product]:
        """Other products in the same category"""
        product = self.get_product(product_id)
        if not product or not product.category:
            return []
        related = [
            p for p in self.products.values()
            if p.id != product_id and p.category and p.category.id == product.category.id
        ]
        return related[:limit]

    def stock_key(self, item: OrderItemRequest) -> tuple[str, Optional[str], Optional[str]]:
        """(product, variant, flavor) ids of the stock count an order line draws from"""
        if item.selected_flavor:
            return item.product, None, item.selected_flavor.id
        product = self.get_product(item.product)
        if item.selected_variant and product and product.is_variant_bearing:
            return item.product, item.selected_variant.id, None
        return item.product, None, None

    def stock_for(self, item: OrderItemRequest) -> int:
        """Current stock of the selection an order line refers to"""
        product = self.get_product(item.product)
        if not product:
            return 0
        _, variant_id, flavor_id = self.stock_key(item)
        # Selections the catalog does not know have no stock
        if flavor_id and not product.find_flavor(flavor_id):
            return 0
        if variant_id and not product.find_variant(variant_id):
            return 0
        return available_stock(product, item.selected_variant, item.selected_flavor)

    def update_stock(self, item: OrderItemRequest, quantity_change: int) -> bool:
        """
        Update stock of the selection an order line refers to.

        Args:
            item: Order line naming product and optional variant/flavor
            quantity_change: Positive to add, negative to remove

        Returns:
            True if successful
        """
        product = self.get_product(item.product)
        if not product:
            return False

        if item.selected_flavor:
            target = product.find_flavor(item.selected_flavor.id)
        elif item.selected_variant and product.is_variant_bearing:
            target = product.find_variant(item.selected_variant.id)
        else:
            target = product

        if target is None:
            return False

        new_quantity = target.stock + quantity_change
        if new_quantity < 0:
            return False

        target.stock = new_quantity
        return True


# Singleton instance
product_db = ProductDatabase()
