"""
Response store backends.

- JsonLinesResponseStore: append-only JSON lines file (``file``)
- SQLiteResponseStore: SQLite table with JSON payloads (``sqlite``)
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ResponseStore, StoredDocument
from .jsonl_store import JsonLinesResponseStore
from .sqlite_store import SQLiteResponseStore

if TYPE_CHECKING:
    from ..config import Settings


__all__ = [
    "ResponseStore",
    "StoredDocument",
    "JsonLinesResponseStore",
    "SQLiteResponseStore",
    "create_store",
]


def create_store(settings: "Settings") -> ResponseStore:
    """
    Build the store selected by ``settings.storage``.

    The store is returned unopened; call ``connect()`` before use.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if settings.storage == "file":
        return JsonLinesResponseStore(settings.data_file)
    if settings.storage == "sqlite":
        return SQLiteResponseStore(settings.db_path)
    raise ValueError(f"Unknown storage backend: {settings.storage!r}")
