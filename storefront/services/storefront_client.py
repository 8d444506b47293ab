"""
Storefront API Client

HTTP client for the storefront backend: catalog, orders, deals and wishlist.
"""

import logging
from typing import Any, Callable, Optional

import httpx

from ..core.config import settings
from ..models.deal import Deal
from ..models.order import Order, OrderRequest
from ..models.product import Product

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class StorefrontAPIError(Exception):
    """Backend answered but reported failure"""
    pass


def describe_error(error: Exception) -> str:
    """Human readable message for a failed request"""
    if isinstance(error, httpx.HTTPStatusError):
        try:
            body = error.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("detail")
            if message:
                return str(message)
        return f"Request failed with status {error.response.status_code}"
    if isinstance(error, httpx.HTTPError):
        return f"Network error: {error}"
    return str(error) or error.__class__.__name__


class StorefrontClient:
    """
    Client for the storefront REST API.

    Responses come wrapped as `{"success": bool, "data": ...}`; the client
    unwraps them and validates `data` into models.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize storefront client.

        Args:
            base_url: Base URL of the API, e.g. http://localhost:8001/api/
            token_provider: Returns the current session token, if any
            timeout: Request timeout in seconds
            transport: Alternative httpx transport (tests, in-process apps)
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/") + "/"
        self._token_provider = token_provider
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.request_timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _generate_headers(self) -> dict[str, str]:
        """Generate headers including the session token if available"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"jwt {token}"

        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and unwrap the response envelope"""
        response = await self._http_client.request(
            method=method,
            url=path.lstrip("/"),
            headers=self._generate_headers(),
            json=body,
            params=params,
        )

        if response.status_code >= 400:
            logger.error(f"Request failed: {method} {path} {response.status_code} - {response.text}")
            response.raise_for_status()

        try:
            payload = response.json()
        except ValueError:
            logger.error(f"Invalid JSON from {method} {path}: {response.text[:200]}")
            raise StorefrontAPIError("Invalid response from server")

        return self._unwrap(payload)

    @staticmethod
    def _unwrap(payload: Any) -> Any:
        if isinstance(payload, dict) and "success" in payload:
            if not payload["success"]:
                raise StorefrontAPIError(payload.get("message") or "Request was not successful")
            return payload.get("data")
        return payload

    # ==================== Catalog APIs ====================

    async def list_products(self, category: Optional[str] = None) -> list[Product]:
        """List catalog products, optionally within one category"""
        params = {"category": category} if category else None
        data = await self._request("GET", "products", params=params)
        return [Product.model_validate(p) for p in data or []]

    async def get_product(self, product_id: str) -> Product:
        """Get product details"""
        data = await self._request("GET", f"products/{product_id}")
        return Product.model_validate(data)

    async def get_related_products(self, product_id: str) -> list[Product]:
        """Get products related to a product"""
        data = await self._request("GET", f"products/{product_id}/related")
        return [Product.model_validate(p) for p in data or []]

    # ==================== Order APIs ====================

    async def create_order(self, order: OrderRequest) -> Order:
        """Submit an order"""
        data = await self._request("POST", "orders", body=order.to_wire())
        return Order.model_validate(data)

    async def list_orders(self) -> list[Order]:
        """Order history of the current user"""
        data = await self._request("GET", "orders")
        return [Order.model_validate(o) for o in data or []]

    async def get_order(self, order_id: str) -> Order:
        """Get order details"""
        data = await self._request("GET", f"orders/{order_id}")
        return Order.model_validate(data)

    # ==================== Deal APIs ====================

    async def get_active_deals(self) -> list[Deal]:
        """Deals currently on offer"""
        data = await self._request("GET", "deals/active")
        return [Deal.model_validate(d) for d in data or []]

    async def get_banner_deals(self) -> list[Deal]:
        """Deals featured in the site banner"""
        data = await self._request("GET", "deals/banner")
        return [Deal.model_validate(d) for d in data or []]

    # ==================== Wishlist APIs ====================

    async def get_wishlist(self) -> list[Product]:
        data = await self._request("GET", "wishlist", params={"populate": "category,reviewTags"})
        return [Product.model_validate(p) for p in data or []]

    async def add_to_wishlist(self, product_id: str) -> list[Product]:
        data = await self._request("POST", f"wishlist/{product_id}")
        return [Product.model_validate(p) for p in data or []]

    async def remove_from_wishlist(self, product_id: str) -> list[Product]:
        data = await self._request("DELETE", f"wishlist/{product_id}")
        return [Product.model_validate(p) for p in data or []]
