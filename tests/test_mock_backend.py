"""Tests for the mock storefront backend"""

import httpx
import pytest

from mock_backend.database import product_db
from mock_backend.main import app


@pytest.fixture
async def http(asgi_transport):
    async with httpx.AsyncClient(transport=asgi_transport, base_url="http://testserver") as c:
        yield c


async def test_health(http):
    response = await http.get("/health")
    assert response.json() == {"status": "healthy", "service": "mock-backend"}


async def test_products_are_enveloped(http):
    response = await http.get("/api/products/prod-002")
    body = response.json()

    assert body["success"] is True
    assert body["data"]["_id"] == "prod-002"
    assert body["data"]["flavors"][3]["isActive"] is False


async def test_not_found_is_enveloped(http):
    response = await http.get("/api/orders/ORD-MISSING")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Order not found"}


async def test_unknown_route_is_enveloped(http):
    response = await http.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["success"] is False


async def test_invalid_order_body(http):
    response = await http.post("/api/orders", json={"items": [{"product": "prod-003", "quantity": 0}]})

    assert response.status_code == 422
    assert response.json() == {"success": False, "message": "Invalid request body"}


async def test_order_without_items(http):
    response = await http.post("/api/orders", json={"items": []})

    assert response.status_code == 400
    assert response.json()["message"] == "Order has no items"


async def test_create_order_reserves_flavor_stock(http):
    response = await http.post("/api/orders", json={
        "items": [{
            "product": "prod-002",
            "quantity": 2,
            "selectedFlavor": {"_id": "flv-002-orange", "name": "Orange", "price": 22, "stock": 3},
            "intensity": 5,
            "price": 22,
        }],
        "paymentMethod": "pay_at_pickup",
    })

    assert response.status_code == 201
    order = response.json()["data"]
    assert order["subtotal"] == "44"
    assert order["status"] == "pending"
    assert order["items"][0]["name"] == "Mush Love Chocolate"
    assert product_db.get_product("prod-002").find_flavor("flv-002-orange").stock == 1


async def test_inactive_flavor_cannot_be_ordered(http):
    response = await http.post("/api/orders", json={
        "items": [{
            "product": "prod-002",
            "quantity": 1,
            "selectedFlavor": {"_id": "flv-002-chili", "name": "Chili"},
            "intensity": 5,
            "price": 24,
        }],
    })

    assert response.status_code == 400
    assert "Available: 0" in response.json()["message"]


async def test_partial_stock_failure_reserves_nothing(http):
    response = await http.post("/api/orders", json={
        "items": [
            {"product": "prod-005", "quantity": 1, "intensity": 3, "price": 30},
            {"product": "prod-004", "quantity": 1, "intensity": 2, "price": 35},
        ],
    })

    assert response.status_code == 400
    assert product_db.get_product("prod-005").stock == 20


async def test_wishlist_requires_token(http):
    response = await http.get("/api/wishlist")

    assert response.status_code == 401
    assert response.json()["success"] is False


async def test_wishlist_unknown_product(http):
    response = await http.post("/api/wishlist/nope", headers={"Authorization": "jwt tok"})
    assert response.status_code == 404


def test_routes_registered():
    paths = {route.path for route in app.routes}
    assert {"/api/products", "/api/orders", "/api/deals/active", "/api/deals/banner", "/api/wishlist"} <= paths


async def test_repeated_lines_are_checked_together(http):
    line = {"product": "prod-003", "quantity": 10, "intensity": 5, "price": 50}

    response = await http.post("/api/orders", json={"items": [line, line]})

    assert response.status_code == 400
    assert "Available: 12" in response.json()["message"]
    assert product_db.get_product("prod-003").stock == 12


async def test_unknown_variant_cannot_be_ordered(http):
    response = await http.post("/api/orders", json={
        "items": [{
            "product": "prod-001",
            "quantity": 1,
            "selectedVariant": {"_id": "var-made-up", "price": 1, "stock": 99},
            "intensity": 5,
            "price": 1,
        }],
    })

    assert response.status_code == 400
    assert product_db.get_product("prod-001").find_variant("var-001-35").stock == 4
