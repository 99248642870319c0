"""
Recently Viewed API
The last products a visitor opened, most recent first (max 8)
"""
from fastapi import APIRouter, Depends

from app.core.session import require_session_id
from app.domain.product import StoredProduct
from app.stores.recently_viewed_store import RecentlyViewedStore, get_recently_viewed_store

router = APIRouter(prefix="/api/v1/recently-viewed", tags=["Recently Viewed"])


@router.get("")
async def get_recently_viewed(
    session_id: str = Depends(require_session_id),
    store: RecentlyViewedStore = Depends(get_recently_viewed_store)
):
    return {"items": [item.model_dump() for item in store.get_items(session_id)]}


@router.post("")
async def add_recently_viewed(
    product: StoredProduct,
    session_id: str = Depends(require_session_id),
    store: RecentlyViewedStore = Depends(get_recently_viewed_store)
):
    items = store.add(session_id, product)
    return {"items": [item.model_dump() for item in items]}


@router.delete("")
async def clear_recently_viewed(
    session_id: str = Depends(require_session_id),
    store: RecentlyViewedStore = Depends(get_recently_viewed_store)
):
    store.clear(session_id)
    return {"success": True}
