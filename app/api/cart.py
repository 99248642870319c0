"""
Cart API
Per-session bag with Shopify checkout handoff. Every request carries the
visitor's X-Session-Id header.

Endpoints:
- GET    /api/v1/cart                      - Current cart with totals
- POST   /api/v1/cart/items                - Add a line (merges by variant)
- PATCH  /api/v1/cart/items/{variant_id}   - Set quantity (0 removes)
- DELETE /api/v1/cart/items/{variant_id}   - Remove a line
- DELETE /api/v1/cart                      - Empty the cart
- POST   /api/v1/cart/checkout             - Create a Shopify checkout URL
"""
import logging

from fastapi import APIRouter, Depends

from app.connectors.shopify_connector import ShopifyConnector, get_shopify_connector
from app.core.session import require_session_id
from app.domain.cart import CartLine, CheckoutResponse, QuantityUpdate
from app.services.checkout_service import create_checkout
from app.stores.cart_store import CartStore, get_cart_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/cart", tags=["Cart"])

# Variant ids are Shopify GIDs ("gid://shopify/ProductVariant/123"), hence :path


@router.get("")
async def get_cart(
    session_id: str = Depends(require_session_id),
    store: CartStore = Depends(get_cart_store)
):
    return store.get_cart(session_id).to_dict()


@router.post("/items")
async def add_item(
    line: CartLine,
    session_id: str = Depends(require_session_id),
    store: CartStore = Depends(get_cart_store)
):
    return store.add_item(session_id, line).to_dict()


@router.patch("/items/{variant_id:path}")
async def update_item(
    variant_id: str,
    update: QuantityUpdate,
    session_id: str = Depends(require_session_id),
    store: CartStore = Depends(get_cart_store)
):
    return store.update_quantity(session_id, variant_id, update.quantity).to_dict()


@router.delete("/items/{variant_id:path}")
async def remove_item(
    variant_id: str,
    session_id: str = Depends(require_session_id),
    store: CartStore = Depends(get_cart_store)
):
    return store.remove_item(session_id, variant_id).to_dict()


@router.delete("")
async def clear_cart(
    session_id: str = Depends(require_session_id),
    store: CartStore = Depends(get_cart_store)
):
    store.clear(session_id)
    return {"success": True}


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(
    session_id: str = Depends(require_session_id),
    store: CartStore = Depends(get_cart_store),
    connector: ShopifyConnector = Depends(get_shopify_connector)
):
    """
    Hand the cart off to Shopify.

    The URL is reused until the cart changes; an empty cart is a 400.
    """
    checkout_url = await create_checkout(store, connector, session_id)
    return {"checkout_url": checkout_url}
