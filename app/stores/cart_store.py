"""
Cart store

Lines are unique by variant. Any change to the lines drops the stored
checkout URL, since it points at a Shopify cart built from the old lines.
"""
import logging

from pydantic import ValidationError

from app.core.exceptions import StorefrontError
from app.domain.cart import MAX_CART_LINES, MAX_LINE_QUANTITY, Cart, CartLine
from app.stores.storage import JSONBlobStore, storage

logger = logging.getLogger(__name__)


class CartStore(JSONBlobStore):
    namespace = "am_cart"

    def get_cart(self, session_id: str) -> Cart:
        raw = self._load(session_id)
        if raw is None:
            return Cart()
        try:
            return Cart.model_validate(raw)
        except ValidationError:
            logger.warning(f"Discarding invalid cart for session {session_id}")
            self._delete(session_id)
            return Cart()

    def _write(self, session_id: str, cart: Cart) -> Cart:
        self._save(session_id, cart.model_dump(mode="json"))
        return cart

    def add_item(self, session_id: str, line: CartLine) -> Cart:
        """Add a line, or increase the quantity of the same variant"""
        cart = self.get_cart(session_id)
        existing = cart.find(line.variant_id)
        if existing:
            existing.quantity = min(existing.quantity + line.quantity, MAX_LINE_QUANTITY)
        elif len(cart.items) >= MAX_CART_LINES:
            raise StorefrontError("Cart is full", status_code=400, code="CART_FULL")
        else:
            cart.items.append(line)
        cart.checkout_url = None
        return self._write(session_id, cart)

    def update_quantity(self, session_id: str, variant_id: str, quantity: int) -> Cart:
        """Set a line's quantity; zero or less removes the line"""
        if quantity <= 0:
            return self.remove_item(session_id, variant_id)

        cart = self.get_cart(session_id)
        line = cart.find(variant_id)
        if line is None:
            raise StorefrontError("Item not in cart", status_code=404, code="NOT_FOUND")
        line.quantity = quantity
        cart.checkout_url = None
        return self._write(session_id, cart)

    def remove_item(self, session_id: str, variant_id: str) -> Cart:
        cart = self.get_cart(session_id)
        cart.items = [line for line in cart.items if line.variant_id != variant_id]
        cart.checkout_url = None
        return self._write(session_id, cart)

    def set_checkout_url(self, session_id: str, checkout_url: str) -> Cart:
        cart = self.get_cart(session_id)
        cart.checkout_url = checkout_url
        return self._write(session_id, cart)

    def clear(self, session_id: str) -> None:
        self._delete(session_id)


cart_store = CartStore(storage)


def get_cart_store() -> CartStore:
    return cart_store
