"""Tests for the cart store"""

import json
import logging
from datetime import timedelta
from decimal import Decimal

from storefront.models import Product, Variant
from storefront.services.cart_store import CartError, CartStore
from storefront.storage import MemoryStorage


class BrokenStorage:
    """Storage whose every call fails"""

    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        raise OSError("quota exceeded")

    def remove(self, key):
        raise OSError("disk unavailable")


def test_add_creates_line_and_persists(storage, clock, simple_product):
    cart = CartStore(storage, clock=clock)
    result = cart.add_to_cart(simple_product, 2)

    assert result.success
    assert result.message == "Added 2x Lion's Mane to cart"
    assert cart.count == 2
    saved = json.loads(storage.values["cart"])
    assert saved[0]["productId"] == "p-simple"
    assert saved[0]["quantity"] == 2


def test_adding_same_selection_merges(storage, clock, simple_product):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 1)
    cart.add_to_cart(simple_product, 2)

    assert len(cart.lines) == 1
    assert cart.lines[0].quantity == 3


def test_different_selections_are_separate_lines(storage, clock, flavor_product):
    flavor_product.flavors[1].stock = 5
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(flavor_product, 1, selected_flavor=flavor_product.flavors[0])
    cart.add_to_cart(flavor_product, 1, selected_flavor=flavor_product.flavors[1])

    assert len(cart.lines) == 2
    assert {line.display_name for line in cart.lines} == {"Chocolate - Mint", "Chocolate - Orange"}


def test_add_beyond_stock_is_refused(storage, clock, variant_product):
    cart = CartStore(storage, clock=clock)
    small = variant_product.variants[0]
    cart.add_to_cart(variant_product, 3, selected_variant=small)

    result = cart.add_to_cart(variant_product, 2, selected_variant=small)

    assert not result.success
    assert result.error == CartError.STOCK_UNAVAILABLE
    assert result.available == 4
    assert result.message == "Only 4 available"
    assert cart.get_line("p-var", selected_variant=small).quantity == 3


def test_add_out_of_stock_selection(storage, clock, variant_product):
    cart = CartStore(storage, clock=clock)
    result = cart.add_to_cart(variant_product, 1, selected_variant=variant_product.variants[1])

    assert result.error == CartError.PRODUCT_OUT_OF_STOCK
    assert result.available == 0
    assert cart.is_empty


def test_add_invalid_quantity(storage, clock, simple_product):
    cart = CartStore(storage, clock=clock)
    result = cart.add_to_cart(simple_product, 0)

    assert result.error == CartError.INVALID_QUANTITY
    assert cart.is_empty
    assert "cart" not in storage.values


def test_update_quantity(storage, clock, simple_product):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 1)

    result = cart.update_quantity("p-simple", 4)

    assert result.success
    assert cart.count == 4


def test_update_to_zero_removes_line(storage, clock, simple_product):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 2)

    result = cart.update_quantity("p-simple", 0)

    assert result.success
    assert cart.is_empty
    assert json.loads(storage.values["cart"]) == []


def test_update_beyond_stock_clamps(storage, clock, simple_product):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 1)

    result = cart.update_quantity("p-simple", 9)

    assert not result.success
    assert result.error == CartError.STOCK_UNAVAILABLE
    assert result.available == 5
    assert cart.lines[0].quantity == 5


def test_update_revalidates_against_fresh_product(storage, clock, simple_product):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 2)
    sold_out = simple_product.model_copy(update={"stock": 0})

    result = cart.update_quantity("p-simple", 3, product=sold_out)

    assert result.error == CartError.PRODUCT_OUT_OF_STOCK
    assert cart.is_empty


def test_update_missing_line(storage, clock):
    cart = CartStore(storage, clock=clock)
    result = cart.update_quantity("nope", 1)
    assert result.error == CartError.LINE_NOT_FOUND


def test_remove_from_cart(storage, clock, variant_product):
    cart = CartStore(storage, clock=clock)
    small = variant_product.variants[0]
    cart.add_to_cart(variant_product, 1, selected_variant=small)

    assert cart.remove_from_cart("p-var").error == CartError.LINE_NOT_FOUND
    assert cart.remove_from_cart("p-var", selected_variant=small).success
    assert cart.is_empty


def test_clear_cart(storage, clock, simple_product, variant_product):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 1)
    cart.add_to_cart(variant_product, 1, selected_variant=variant_product.variants[0])

    cart.clear_cart()

    assert cart.is_empty
    assert cart.count == 0


def test_deal_price_is_locked_in(storage, clock, simple_product, percent_deal):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 1, deal=percent_deal)

    clock.advance(days=5)
    cart.add_to_cart(simple_product, 1, deal=percent_deal)

    line = cart.lines[0]
    assert line.quantity == 2
    assert line.unit_price == Decimal("15.992")
    assert line.base_price == Decimal("19.99")
    assert line.deal.deal_id == "d-pct"
    assert line.is_discounted


def test_expired_deal_not_applied_to_new_line(storage, clock, simple_product, percent_deal):
    clock.advance(days=5)
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 1, deal=percent_deal)

    line = cart.lines[0]
    assert line.unit_price == Decimal("19.99")
    assert line.deal is None


def test_lines_are_copies(storage, clock, simple_product):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 1)

    cart.lines[0].quantity = 99

    assert cart.count == 1


def test_cart_survives_reload(storage, clock, simple_product, variant_product, percent_deal):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 2, deal=percent_deal)
    cart.add_to_cart(variant_product, 1, selected_variant=variant_product.variants[0])

    reloaded = CartStore(storage, clock=clock)

    assert [line.model_dump() for line in reloaded.lines] == [line.model_dump() for line in cart.lines]


def test_hydrate_merges_duplicate_lines():
    entry = {"productId": "p1", "name": "A", "quantity": 1, "unitPrice": "5", "stock": 10}
    storage = MemoryStorage({"cart": json.dumps([entry, dict(entry, quantity=2)])})

    cart = CartStore(storage)

    assert len(cart.lines) == 1
    assert cart.count == 3


def test_hydrate_drops_unreadable_lines(caplog):
    entries = [
        {"productId": "p1", "name": "A", "quantity": 1, "unitPrice": "5"},
        {"productId": "p2", "name": "B", "quantity": 0, "unitPrice": "5"},
        {"name": "no product id", "quantity": 1, "unitPrice": "5"},
    ]
    storage = MemoryStorage({"cart": json.dumps(entries)})

    with caplog.at_level(logging.WARNING):
        cart = CartStore(storage)

    assert [line.product_id for line in cart.lines] == ["p1"]
    assert "Dropping unreadable cart line" in caplog.text


def test_hydrate_tolerates_corrupt_data():
    assert CartStore(MemoryStorage({"cart": "{not json"})).is_empty
    assert CartStore(MemoryStorage({"cart": json.dumps({"items": []})})).is_empty


def test_storage_failures_do_not_break_the_cart(clock, simple_product, caplog):
    with caplog.at_level(logging.WARNING):
        cart = CartStore(BrokenStorage(), clock=clock)
        result = cart.add_to_cart(simple_product, 1)

    assert result.success
    assert cart.count == 1
    assert "Error saving cart to storage" in caplog.text


def test_custom_storage_key(storage, clock, simple_product):
    cart = CartStore(storage, storage_key="guest-cart", clock=clock)
    cart.add_to_cart(simple_product, 1)

    assert "guest-cart" in storage.values
    assert "cart" not in storage.values


def test_line_keeps_product_snapshot(storage, clock):
    product = Product(id="p", name="Snap", price="3", stock=2, intensity=8, images=["/a.png", "/b.png"])
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(product, 1)

    line = cart.lines[0]
    assert line.image == "/a.png"
    assert line.intensity == 8
    assert line.stock == 2


def test_count_matches_line_quantities_throughout(storage, clock, simple_product, variant_product, flavor_product):
    cart = CartStore(storage, clock=clock)
    small = variant_product.variants[0]
    mint = flavor_product.find_flavor("f-mint")
    operations = [
        lambda: cart.add_to_cart(simple_product, 2),
        lambda: cart.add_to_cart(variant_product, 3, selected_variant=small),
        lambda: cart.add_to_cart(variant_product, 5, selected_variant=small),
        lambda: cart.add_to_cart(flavor_product, 1, selected_flavor=mint),
        lambda: cart.update_quantity("p-simple", 8),
        lambda: cart.update_quantity("p-var", 1, selected_variant=small),
        lambda: cart.remove_from_cart("p-flv", selected_flavor=mint),
        lambda: cart.update_quantity("p-simple", 0),
    ]

    for operation in operations:
        operation()
        assert cart.count == sum(line.quantity for line in cart.lines)

    assert cart.count == 1


def test_variant_ignored_for_product_without_variants(storage, clock, simple_product):
    cart = CartStore(storage, clock=clock)
    cart.add_to_cart(simple_product, 1, selected_variant=Variant(id="v-stray", price="1", stock=50))
    cart.add_to_cart(simple_product, 1)

    assert len(cart.lines) == 1
    assert cart.lines[0].variant_id is None
    assert cart.count == 2
