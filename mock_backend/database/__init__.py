# Database modules

from .products import product_db, ProductDatabase
from .orders import OrderDatabase, InsufficientStock
from .deals import deal_db, DealDatabase
from .wishlist import WishlistDatabase

order_db = OrderDatabase(product_db)
wishlist_db = WishlistDatabase(product_db)

__all__ = [
    "product_db",
    "ProductDatabase",
    "order_db",
    "OrderDatabase",
    "InsufficientStock",
    "deal_db",
    "DealDatabase",
    "wishlist_db",
    "WishlistDatabase",
]
