"""
Persistent key-value backing store.

Each entity collection lives under one string key as a single serialized
blob. Two implementations share the BackingStore protocol:

- SQLiteBackingStore: durable across process restarts on the same host
- MemoryBackingStore: process-local, used by tests and throwaway sessions

There are no transactions across keys; a write replaces one blob atomically.
"""

import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

from healthstore.services.results import logger

MEMORY_URL = "memory://"
SQLITE_SCHEME = "sqlite:///"


class BackingStore(Protocol):
    """
    Protocol for string-keyed blob storage.

    read() returns None for a key that was never written; absence is not an
    error and callers treat it as an empty collection.
    """

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, blob: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


class MemoryBackingStore:
    """Dictionary-backed store that lives as long as the object does."""

    def __init__(self) -> None:
        self._blobs: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self._blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self._blobs[key] = blob

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._blobs)


class SQLiteBackingStore:
    """
    SQLite-backed store: one row per collection key.

    A new connection is opened per call so the store object can be shared
    freely; every write commits before the connection closes.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.logger = logger.bind(component="backing_store", path=str(self.path))
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._cursor() as cur:
            cur.execute("CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, blob TEXT NOT NULL)")

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor and close the connection on exit."""
        conn = sqlite3.connect(self.path)
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def read(self, key: str) -> str | None:
        with self._cursor() as cur:
            row = cur.execute("SELECT blob FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def write(self, key: str, blob: str) -> None:
        with self._cursor() as cur:
            cur.execute(
                "INSERT INTO kv (key, blob) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET blob = excluded.blob",
                (key, blob),
            )
        self.logger.debug("blob_written", key=key, size=len(blob))

    def delete(self, key: str) -> None:
        with self._cursor() as cur:
            cur.execute("DELETE FROM kv WHERE key = ?", (key,))

    def keys(self) -> list[str]:
        with self._cursor() as cur:
            rows = cur.execute("SELECT key FROM kv ORDER BY key").fetchall()
        return [row[0] for row in rows]


def create_backing_store(url: str) -> BackingStore:
    """Build a backing store from a `memory://` or `sqlite:///path` URL.

    Relative SQLite paths resolve against the current working directory.
    """
    if url == MEMORY_URL:
        return MemoryBackingStore()
    if url.startswith(SQLITE_SCHEME):
        raw_path = url[len(SQLITE_SCHEME) :]
        if not raw_path:
            raise ValueError("sqlite URL must include a file path")
        path = raw_path if os.path.isabs(raw_path) else os.path.abspath(raw_path)
        return SQLiteBackingStore(path)
    raise ValueError(f"Unsupported storage URL: {url}")
