"""Shared fixtures"""

from datetime import datetime, timezone

import httpx
import pytest

from mock_backend.database import deal_db, order_db, product_db, wishlist_db
from mock_backend.main import app
from storefront.core.clock import FixedClock
from storefront.models import Deal, Flavor, Product, Size, Variant
from storefront.services.storefront_client import StorefrontClient
from storefront.storage import MemoryStorage

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
API_BASE = "http://testserver/api/"


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def simple_product():
    return Product(id="p-simple", name="Lion's Mane", price="19.99", stock=5, intensity=3)


@pytest.fixture
def variant_product():
    return Product(
        id="p-var",
        name="Golden Teacher",
        price="25.00",
        intensity=7,
        variants=[
            Variant(id="v-small", size=Size(value=3.5, unit="grams"), price="25.00", stock=4),
            Variant(id="v-large", size=Size(value=7, unit="grams"), price="45.00", stock=0),
        ],
    )


@pytest.fixture
def flavor_product():
    return Product(
        id="p-flv",
        name="Chocolate",
        price="20.00",
        flavors=[
            Flavor(id="f-mint", name="Mint", price="20.00", stock=3),
            Flavor(id="f-orange", name="Orange", price="22.00", stock=0),
            Flavor(id="f-chili", name="Chili", price="24.00", stock=9, is_active=False),
        ],
    )


@pytest.fixture
def percent_deal():
    return Deal.model_validate({
        "_id": "d-pct",
        "title": "Flash Sale",
        "discountType": "percentage",
        "discountPercentage": 20,
        "products": ["p-simple"],
        "startDate": "2024-05-01T00:00:00Z",
        "endDate": "2024-06-02T00:00:00Z",
    })


@pytest.fixture
def fixed_deal():
    return Deal.model_validate({
        "_id": "d-fixed",
        "title": "Five Off",
        "discountType": "fixed",
        "discountAmount": 5,
        "dealItems": [{"product": "p-var", "variantId": "v-small"}],
        "startDate": "2024-05-01T00:00:00Z",
        "endDate": "2024-06-02T00:00:00Z",
    })


@pytest.fixture(autouse=True)
def reset_backend():
    """Every test starts from the seeded mock catalog"""
    product_db.reset()
    order_db.reset()
    deal_db.reset(FixedClock(NOW))
    wishlist_db.reset()
    yield


@pytest.fixture
def asgi_transport():
    return httpx.ASGITransport(app=app)


@pytest.fixture
async def client(asgi_transport):
    async with StorefrontClient(base_url=API_BASE, transport=asgi_transport) as c:
        yield c
