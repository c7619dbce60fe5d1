"""
Tests for key-value storage backends
"""

import pytest
import tempfile
from pathlib import Path

from echeck.storage import (
    InMemoryKeyValueStore, SQLiteKeyValueStore, KeyValueStore, create_store
)


class TestInMemoryStore:
    """In-memory backend"""

    def test_basic_operations(self):
        store = InMemoryKeyValueStore()

        assert store.get("missing") is None

        store.set("ledger", b"[]")
        assert store.get("ledger") == b"[]"
        assert store.keys() == ["ledger"]

        store.set("ledger", b"[1]")
        assert store.get("ledger") == b"[1]"

        assert store.delete("ledger")
        assert not store.delete("ledger")
        assert store.get("ledger") is None

        store.close()

    def test_rejects_non_bytes(self):
        store = InMemoryKeyValueStore()
        with pytest.raises(TypeError):
            store.set("ledger", "[]")

    def test_stored_value_is_a_copy(self):
        store = InMemoryKeyValueStore()
        value = bytearray(b"abc")
        store.set("k", value)
        value[0] = ord("z")
        assert store.get("k") == b"abc"


class TestSQLiteStore:
    """SQLite backend"""

    def test_basic_operations(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            store = SQLiteKeyValueStore(Path(temp_dir) / "test.db")

            assert store.get("missing") is None
            store.set("ledger", "[{\"a\": \"بنك\"}]".encode("utf-8"))
            assert store.get("ledger").decode("utf-8") == "[{\"a\": \"بنك\"}]"

            store.set("ledger", b"[]")
            assert store.get("ledger") == b"[]"
            assert store.keys() == ["ledger"]

            assert store.delete("ledger")
            assert store.get("ledger") is None
            store.close()

    def test_persists_across_connections(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            db_path = Path(temp_dir) / "test.db"

            store = SQLiteKeyValueStore(db_path)
            store.set("ledger", b"snapshot-1")
            store.close()

            reopened = SQLiteKeyValueStore(db_path)
            assert reopened.get("ledger") == b"snapshot-1"
            reopened.close()

    def test_in_memory_database(self):
        store = SQLiteKeyValueStore()
        store.set("k", b"v")
        assert store.get("k") == b"v"
        store.close()

    def test_rejects_non_bytes(self):
        store = SQLiteKeyValueStore()
        with pytest.raises(TypeError):
            store.set("k", 42)
        store.close()


class TestCreateStore:
    """Backend selection"""

    def test_memory(self):
        assert isinstance(create_store("memory"), InMemoryKeyValueStore)

    def test_sqlite(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            store = create_store("sqlite", Path(temp_dir) / "x.db")
            assert isinstance(store, SQLiteKeyValueStore)
            assert isinstance(store, KeyValueStore)
            store.close()

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_store("redis")
