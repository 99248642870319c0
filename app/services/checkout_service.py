"""
Checkout handoff

Turns the session cart into a Shopify cart and remembers its checkoutUrl
until the lines change again.
"""
import logging

from app.connectors.shopify_connector import ShopifyConnector
from app.core.exceptions import StorefrontError
from app.stores.cart_store import CartStore

logger = logging.getLogger(__name__)


async def create_checkout(cart_store: CartStore, connector: ShopifyConnector, session_id: str) -> str:
    """
    Returns:
        Shopify checkout URL for the current lines

    Raises:
        StorefrontError: the cart is empty (400)
    """
    cart = cart_store.get_cart(session_id)
    if not cart.items:
        raise StorefrontError("Cart is empty", status_code=400, code="EMPTY_CART")

    if cart.checkout_url:
        return cart.checkout_url

    checkout_url = await connector.create_checkout(cart.items)
    cart_store.set_checkout_url(session_id, checkout_url)
    logger.info(f"Checkout created for {cart.total_items} items")
    return checkout_url
