"""Storefront cart, pricing and checkout core"""

from .app import Storefront, create_storefront

__version__ = "1.0.0"

__all__ = ["Storefront", "create_storefront", "__version__"]
