"""
Recently viewed store

Most recent first, unique by handle, capped at MAX_ITEMS.
"""
import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from app.domain.product import StoredProduct
from app.stores.storage import JSONBlobStore, storage

logger = logging.getLogger(__name__)

MAX_ITEMS = 8

_items_adapter = TypeAdapter(List[StoredProduct])


class RecentlyViewedStore(JSONBlobStore):
    namespace = "am_recently_viewed"

    def __init__(self, storage, max_items: int = MAX_ITEMS):
        super().__init__(storage)
        self.max_items = max_items

    def get_items(self, session_id: str) -> List[StoredProduct]:
        raw = self._load(session_id)
        if raw is None:
            return []
        try:
            return _items_adapter.validate_python(raw)
        except ValidationError:
            logger.warning(f"Discarding invalid history for session {session_id}")
            self._delete(session_id)
            return []

    def add(self, session_id: str, product: StoredProduct) -> List[StoredProduct]:
        """Move (or insert) the product to the front and trim the tail"""
        others = [item for item in self.get_items(session_id) if item.handle != product.handle]
        items = ([product] + others)[:self.max_items]
        self._save(session_id, [item.model_dump() for item in items])
        return items

    def clear(self, session_id: str) -> None:
        self._delete(session_id)


recently_viewed_store = RecentlyViewedStore(storage)


def get_recently_viewed_store() -> RecentlyViewedStore:
    return recently_viewed_store
