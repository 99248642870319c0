"""
Unit tests for MemoryStorage
"""
from app.stores.storage import MemoryStorage


class TestMemoryStorage:

    def test_set_get_delete(self):
        storage = MemoryStorage()
        storage.set("am_cart:a", "{}")

        assert storage.get("am_cart:a") == "{}"
        storage.delete("am_cart:a")
        assert storage.get("am_cart:a") is None

    def test_oldest_key_evicted_past_capacity(self):
        storage = MemoryStorage(max_entries=2)
        storage.set("a", "1")
        storage.set("b", "2")
        storage.set("c", "3")

        assert len(storage) == 2
        assert storage.get("a") is None
        assert storage.get("c") == "3"

    def test_reads_keep_a_key_alive(self):
        storage = MemoryStorage(max_entries=2)
        storage.set("a", "1")
        storage.set("b", "2")
        storage.get("a")

        storage.set("c", "3")

        assert storage.get("a") == "1"
        assert storage.get("b") is None

    def test_overwrite_does_not_grow(self):
        storage = MemoryStorage(max_entries=2)
        for value in range(5):
            storage.set("a", str(value))

        assert len(storage) == 1
        assert storage.get("a") == "4"
