"""
Wishlist API

Endpoints:
- GET    /api/v1/wishlist                  - Saved products
- GET    /api/v1/wishlist/{handle}         - Whether a product is saved
- POST   /api/v1/wishlist                  - Save a product
- POST   /api/v1/wishlist/toggle           - Save or unsave (heart button)
- DELETE /api/v1/wishlist/{handle}         - Unsave a product
- DELETE /api/v1/wishlist                  - Clear
"""
from fastapi import APIRouter, Depends

from app.core.session import require_session_id
from app.domain.product import StoredProduct
from app.stores.wishlist_store import WishlistStore, get_wishlist_store

router = APIRouter(prefix="/api/v1/wishlist", tags=["Wishlist"])


def _items_response(items):
    return {"count": len(items), "items": [item.model_dump() for item in items]}


@router.get("")
async def get_wishlist(
    session_id: str = Depends(require_session_id),
    store: WishlistStore = Depends(get_wishlist_store)
):
    return _items_response(store.get_items(session_id))


@router.get("/{handle}")
async def is_in_wishlist(
    handle: str,
    session_id: str = Depends(require_session_id),
    store: WishlistStore = Depends(get_wishlist_store)
):
    return {"handle": handle, "in_wishlist": store.contains(session_id, handle)}


@router.post("")
async def add_to_wishlist(
    product: StoredProduct,
    session_id: str = Depends(require_session_id),
    store: WishlistStore = Depends(get_wishlist_store)
):
    return _items_response(store.add(session_id, product))


@router.post("/toggle")
async def toggle_wishlist(
    product: StoredProduct,
    session_id: str = Depends(require_session_id),
    store: WishlistStore = Depends(get_wishlist_store)
):
    items = store.toggle(session_id, product)
    response = _items_response(items)
    response["in_wishlist"] = any(item.handle == product.handle for item in items)
    return response


@router.delete("/{handle}")
async def remove_from_wishlist(
    handle: str,
    session_id: str = Depends(require_session_id),
    store: WishlistStore = Depends(get_wishlist_store)
):
    return _items_response(store.remove(session_id, handle))


@router.delete("")
async def clear_wishlist(
    session_id: str = Depends(require_session_id),
    store: WishlistStore = Depends(get_wishlist_store)
):
    store.clear(session_id)
    return {"success": True}
