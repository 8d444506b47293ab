"""Tests for stock resolution"""

from storefront.models import Flavor, Product, Variant
from storefront.services.stock import available_stock, is_out_of_stock


def test_simple_product_uses_base_stock(simple_product):
    assert available_stock(simple_product) == 5


def test_variant_stock(variant_product):
    small, large = variant_product.variants
    assert available_stock(variant_product, selected_variant=small) == 4
    assert available_stock(variant_product, selected_variant=large) == 0
    assert is_out_of_stock(variant_product, selected_variant=large)


def test_unselected_variant_product_sums_variants(variant_product):
    assert available_stock(variant_product) == 4


def test_flavor_stock(flavor_product):
    mint = flavor_product.find_flavor("f-mint")
    assert available_stock(flavor_product, selected_flavor=mint) == 3


def test_inactive_flavor_has_no_stock(flavor_product):
    chili = flavor_product.find_flavor("f-chili")
    assert available_stock(flavor_product, selected_flavor=chili) == 0


def test_unselected_flavor_product_sums_active_flavors(flavor_product):
    assert available_stock(flavor_product) == 3


def test_flavor_wins_over_variant():
    product = Product(
        id="p-both",
        name="Both",
        variants=[Variant(id="v1", price="10", stock=8)],
        flavors=[Flavor(id="f1", name="Berry", price="12", stock=2)],
    )
    stock = available_stock(product, selected_variant=product.variants[0], selected_flavor=product.flavors[0])
    assert stock == 2


def test_variant_ignored_on_product_without_variants(simple_product):
    stray = Variant(id="v-stray", price="1", stock=100)
    assert available_stock(simple_product, selected_variant=stray) == 5


def test_has_stock_false_means_unavailable():
    product = Product(id="p", name="Reishi", price="35", stock=8, has_stock=False)
    assert available_stock(product) == 0
    assert is_out_of_stock(product)


def test_fresh_product_overrides_stale_snapshot(variant_product):
    stale = Variant(id="v-small", price="25.00", stock=99)
    assert available_stock(variant_product, selected_variant=stale) == 4


def test_loose_stock_values_default_to_zero():
    assert Product.model_validate({"_id": "a", "name": "A", "stock": "abc"}).stock == 0
    assert Product.model_validate({"_id": "b", "name": "B", "stock": None}).stock == 0
    assert Product.model_validate({"_id": "c", "name": "C", "stock": -3}).stock == 0
    assert Product.model_validate({"_id": "d", "name": "D", "stock": "7"}).stock == 7
    assert Product.model_validate({"_id": "e", "name": "E"}).stock == 0
