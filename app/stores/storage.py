"""
Key-value blob storage for per-session stores

Each store keeps one JSON document per session under a namespaced key,
the way the web client keeps them in localStorage.
"""
import json
import logging
import threading
from collections import OrderedDict
from typing import Any, Optional

logger = logging.getLogger(__name__)


MAX_ENTRIES = 10_000


class MemoryStorage:
    """
    Process-local storage. Contents are lost on restart.

    Holds at most max_entries keys; past that the least recently used
    key is evicted.
    """

    def __init__(self, max_entries: int = MAX_ENTRIES):
        self.max_entries = max_entries
        self._data: "OrderedDict[str, str]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            if key not in self._data:
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self.max_entries:
                evicted, _ = self._data.popitem(last=False)
                logger.debug(f"Evicted {evicted} from session storage")

    def __len__(self) -> int:
        return len(self._data)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class JSONBlobStore:
    """
    Base for stores that persist one JSON value per session.

    A blob that no longer parses is deleted and read as missing.
    """

    namespace: str = ""

    def __init__(self, storage: MemoryStorage):
        self.storage = storage

    def _key(self, session_id: str) -> str:
        return f"{self.namespace}:{session_id}"

    def _load(self, session_id: str) -> Optional[Any]:
        key = self._key(session_id)
        raw = self.storage.get(key)
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding corrupt {self.namespace} blob for session {session_id}")
            self.storage.delete(key)
            return None

    def _save(self, session_id: str, value: Any) -> None:
        self.storage.set(self._key(session_id), json.dumps(value))

    def _delete(self, session_id: str) -> None:
        self.storage.delete(self._key(session_id))


# Shared storage behind all session stores
storage = MemoryStorage()
