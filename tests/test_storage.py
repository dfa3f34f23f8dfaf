"""Tests for the key-value stores."""

import sqlite3

import pytest

from storage import MemoryStore, SqliteStore, StorageError


def test_memory_store_get_set_remove() -> None:
    store = MemoryStore({"foodItems": "[]"})

    assert store.get("foodItems") == "[]"
    store.set("foodItems", "[1]")
    assert store.get("foodItems") == "[1]"
    store.remove("foodItems")
    assert store.get("foodItems") is None
    store.remove("foodItems")


def test_sqlite_store_creates_database_and_round_trips(tmp_path) -> None:
    path = tmp_path / "nested" / "tracker.db"
    store = SqliteStore(path)

    assert store.get("foodItems") is None
    store.set("foodItems", '[{"id":1,"name":"Apple","calories":95}]')

    assert path.exists()
    reopened = SqliteStore(path)
    assert reopened.get("foodItems") == '[{"id":1,"name":"Apple","calories":95}]'


def test_sqlite_store_replaces_and_removes(tmp_path) -> None:
    store = SqliteStore(tmp_path / "tracker.db")
    store.set("foodItems", "first")
    store.set("foodItems", "second")
    store.set("other", "kept")

    assert store.get("foodItems") == "second"

    store.remove("foodItems")
    store.remove("missing")

    assert store.get("foodItems") is None
    assert store.get("other") == "kept"

    with sqlite3.connect(tmp_path / "tracker.db") as conn:
        rows = conn.execute("SELECT key FROM kv_store").fetchall()
    assert rows == [("other",)]


def test_sqlite_store_wraps_open_failures(tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    store = SqliteStore(blocker / "tracker.db")

    with pytest.raises(StorageError):
        store.set("foodItems", "[]")


def test_sqlite_store_wraps_query_failures(tmp_path) -> None:
    path = tmp_path / "tracker.db"
    store = SqliteStore(path)
    store.set("foodItems", "[]")

    with sqlite3.connect(path) as conn:
        conn.execute("DROP TABLE kv_store")

    with pytest.raises(StorageError):
        store.get("foodItems")
