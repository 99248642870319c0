"""
Wishlist store

Saved products per session, unique by handle, in the order they were added.
"""
import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from app.domain.product import StoredProduct
from app.stores.storage import JSONBlobStore, storage

logger = logging.getLogger(__name__)

_items_adapter = TypeAdapter(List[StoredProduct])


class WishlistStore(JSONBlobStore):
    namespace = "am_wishlist"

    def get_items(self, session_id: str) -> List[StoredProduct]:
        raw = self._load(session_id)
        if raw is None:
            return []
        try:
            return _items_adapter.validate_python(raw)
        except ValidationError:
            logger.warning(f"Discarding invalid wishlist for session {session_id}")
            self._delete(session_id)
            return []

    def _write(self, session_id: str, items: List[StoredProduct]) -> List[StoredProduct]:
        self._save(session_id, [item.model_dump() for item in items])
        return items

    def contains(self, session_id: str, handle: str) -> bool:
        return any(item.handle == handle for item in self.get_items(session_id))

    def add(self, session_id: str, product: StoredProduct) -> List[StoredProduct]:
        """Append the product; a handle already present leaves the list unchanged"""
        items = self.get_items(session_id)
        if any(item.handle == product.handle for item in items):
            return items
        return self._write(session_id, items + [product])

    def remove(self, session_id: str, handle: str) -> List[StoredProduct]:
        items = [item for item in self.get_items(session_id) if item.handle != handle]
        return self._write(session_id, items)

    def toggle(self, session_id: str, product: StoredProduct) -> List[StoredProduct]:
        if self.contains(session_id, product.handle):
            return self.remove(session_id, product.handle)
        return self.add(session_id, product)

    def clear(self, session_id: str) -> None:
        self._delete(session_id)


wishlist_store = WishlistStore(storage)


def get_wishlist_store() -> WishlistStore:
    return wishlist_store
