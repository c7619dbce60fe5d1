"""
Storage Backend Module

Provides the key-value persistence port used by the check ledger, with an
in-memory implementation (testing) and a SQLite implementation (persistence).
Values are opaque bytes; the ledger stores one JSON snapshot under one key.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Union
from datetime import datetime, timezone
import sqlite3
import threading
from pathlib import Path


class KeyValueStore(ABC):
    """Abstract interface for durable key-value stores"""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the value stored under key, or None when absent"""
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous value"""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete key; returns True if it existed"""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys"""
        pass

    def close(self) -> None:
        """Close the store (default no-op)"""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for testing"""

    def __init__(self):
        self._data: Dict[str, bytes] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("Value must be bytes")
        with self._lock:
            # Copy to prevent external mutation
            self._data[key] = bytes(value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data.keys())


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite key-value store for persistence"""

    TABLE = "kv_store"

    def __init__(self, db_path: Union[str, Path] = ":memory:"):
        self.db_path = str(db_path)
        self._connection = sqlite3.connect(self.db_path, check_same_thread=False)
        self._lock = threading.RLock()

        with self._lock:
            # Enable WAL mode for better concurrent access
            if self.db_path != ":memory:":
                self._connection.execute("PRAGMA journal_mode = WAL")
                self._connection.execute("PRAGMA synchronous = NORMAL")
            self._connection.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.TABLE} (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            self._connection.commit()

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            cursor = self._connection.execute(f"""
                SELECT value FROM {self.TABLE} WHERE key = ?
            """, (key,))
            row = cursor.fetchone()
            if row:
                return bytes(row[0])
            return None

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("Value must be bytes")
        with self._lock:
            now = datetime.now(timezone.utc).isoformat()
            # Single statement, so the previous value survives a failed write
            self._connection.execute(f"""
                INSERT OR REPLACE INTO {self.TABLE} (key, value, updated_at)
                VALUES (?, ?, ?)
            """, (key, sqlite3.Binary(bytes(value)), now))
            self._connection.commit()

    def delete(self, key: str) -> bool:
        with self._lock:
            cursor = self._connection.execute(f"""
                DELETE FROM {self.TABLE} WHERE key = ?
            """, (key,))
            self._connection.commit()
            return cursor.rowcount > 0

    def keys(self) -> List[str]:
        with self._lock:
            cursor = self._connection.execute(f"""
                SELECT key FROM {self.TABLE} ORDER BY key
            """)
            return [row[0] for row in cursor.fetchall()]

    def close(self) -> None:
        """Close SQLite connection"""
        with self._lock:
            if self._connection:
                self._connection.close()
                self._connection = None


def create_store(backend: str, db_path: Union[str, Path] = "echeck.db") -> KeyValueStore:
    """Build a store from a backend name ("sqlite" or "memory")"""
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "sqlite":
        return SQLiteKeyValueStore(db_path)
    raise ValueError(f"Unknown storage backend: {backend}")
