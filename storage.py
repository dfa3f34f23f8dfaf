"""
Storage module for the Calorie Tracker.
A small key-value string store with SQLite and in-memory backends.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger("calorie_tracker.storage")


class StorageError(Exception):
    """Raised when the underlying store cannot be read or written."""


class KeyValueStore(ABC):
    """Durable string storage addressed by key."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the key. Removing an absent key does nothing."""


class MemoryStore(KeyValueStore):
    """Dict-backed store, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class SqliteStore(KeyValueStore):
    """Key-value store kept in a single SQLite table."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._initialized = False

    def get_connection(self) -> sqlite3.Connection:
        """Get a database connection, creating the database directory if needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.path)
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open {self.path}: {e}") from e
        conn.row_factory = sqlite3.Row
        if not self._initialized:
            try:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """)
                conn.commit()
            except sqlite3.Error as e:
                conn.close()
                raise StorageError(f"Cannot initialize {self.path}: {e}") from e
            self._initialized = True
        return conn

    def get(self, key: str) -> Optional[str]:
        conn = self.get_connection()
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e
        finally:
            conn.close()
        return row['value'] if row else None

    def set(self, key: str, value: str) -> None:
        conn = self.get_connection()
        try:
            conn.execute("""
                INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)
            """, (key, value))
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write '{key}': {e}") from e
        finally:
            conn.close()
        logger.debug("Stored %d characters under '%s'", len(value), key)

    def remove(self, key: str) -> None:
        conn = self.get_connection()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to remove '{key}': {e}") from e
        finally:
            conn.close()
        logger.debug("Removed '%s'", key)
