# API Routes

from .products import router as products_router
from .orders import router as orders_router
from .deals import router as deals_router
from .wishlist import router as wishlist_router

__all__ = ["products_router", "orders_router", "deals_router", "wishlist_router"]
