"""
Unit tests for CartStore
"""
from decimal import Decimal

import pytest

from app.core.exceptions import StorefrontError
from app.domain.cart import MAX_CART_LINES, MAX_LINE_QUANTITY, CartLine, Money
from app.stores.cart_store import CartStore
from app.stores.storage import MemoryStorage

SESSION = "session-1"
HOODIE = "gid://shopify/ProductVariant/101"
CAP = "gid://shopify/ProductVariant/202"


def line(variant_id=HOODIE, amount="85.00", quantity=1):
    return CartLine(
        variant_id=variant_id,
        variant_title="Black / L",
        product_handle="founders-hoodie",
        product_title="Founders Series Hoodie",
        price=Money(amount=Decimal(amount)),
        quantity=quantity,
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return CartStore(storage)


class TestCartStore:

    def test_new_session_has_empty_cart(self, store):
        cart = store.get_cart(SESSION)
        assert cart.items == []
        assert cart.total_items == 0
        assert cart.total_price == Decimal("0")

    def test_add_merges_same_variant(self, store):
        store.add_item(SESSION, line(quantity=1))
        cart = store.add_item(SESSION, line(quantity=2))

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_merged_quantity_is_capped(self, store):
        store.add_item(SESSION, line(quantity=MAX_LINE_QUANTITY))
        cart = store.add_item(SESSION, line(quantity=5))

        assert cart.items[0].quantity == MAX_LINE_QUANTITY
        assert store.get_cart(SESSION).items[0].quantity == MAX_LINE_QUANTITY

    def test_line_count_is_capped(self, store):
        for n in range(MAX_CART_LINES):
            store.add_item(SESSION, line(variant_id=f"gid://shopify/ProductVariant/{n}"))

        with pytest.raises(StorefrontError) as exc_info:
            store.add_item(SESSION, line(variant_id="gid://shopify/ProductVariant/overflow"))

        assert exc_info.value.code == "CART_FULL"
        assert len(store.get_cart(SESSION).items) == MAX_CART_LINES

    def test_full_cart_still_merges_existing_variant(self, store):
        for n in range(MAX_CART_LINES):
            store.add_item(SESSION, line(variant_id=f"gid://shopify/ProductVariant/{n}"))

        cart = store.add_item(SESSION, line(variant_id="gid://shopify/ProductVariant/0"))

        assert cart.items[0].quantity == 2

    def test_totals(self, store):
        store.add_item(SESSION, line(quantity=2))
        cart = store.add_item(SESSION, line(variant_id=CAP, amount="30.50"))

        assert cart.total_items == 3
        assert cart.total_price == Decimal("200.50")
        assert cart.to_dict()["total_price"] == {"amount": "200.50", "currency_code": "USD"}

    def test_update_quantity(self, store):
        store.add_item(SESSION, line())
        cart = store.update_quantity(SESSION, HOODIE, 4)
        assert cart.items[0].quantity == 4

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_update_to_zero_or_less_removes(self, store, quantity):
        store.add_item(SESSION, line())
        assert store.update_quantity(SESSION, HOODIE, quantity).items == []

    def test_update_missing_line(self, store):
        with pytest.raises(StorefrontError) as exc_info:
            store.update_quantity(SESSION, HOODIE, 2)
        assert exc_info.value.status_code == 404

    def test_remove_and_clear(self, store):
        store.add_item(SESSION, line())
        store.add_item(SESSION, line(variant_id=CAP))

        cart = store.remove_item(SESSION, HOODIE)
        assert [item.variant_id for item in cart.items] == [CAP]

        store.clear(SESSION)
        assert store.get_cart(SESSION).items == []

    def test_mutations_drop_checkout_url(self, store):
        store.add_item(SESSION, line())
        store.set_checkout_url(SESSION, "https://shop.example/checkout")
        assert store.get_cart(SESSION).checkout_url == "https://shop.example/checkout"

        cart = store.update_quantity(SESSION, HOODIE, 2)

        assert cart.checkout_url is None
        assert store.get_cart(SESSION).checkout_url is None

    def test_sessions_are_isolated(self, store):
        store.add_item(SESSION, line())
        assert store.get_cart("session-2").items == []

    def test_corrupt_blob_starts_empty(self, store, storage):
        storage.set(f"am_cart:{SESSION}", "{not json")

        assert store.get_cart(SESSION).items == []
        assert storage.get(f"am_cart:{SESSION}") is None

    def test_invalid_blob_starts_empty(self, store, storage):
        storage.set(f"am_cart:{SESSION}", '{"items": [{"variant_id": ""}]}')
        assert store.get_cart(SESSION).items == []
