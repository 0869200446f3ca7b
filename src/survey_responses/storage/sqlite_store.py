"""
SQLite response store.

Each response is one row of the ``responses`` table: an autoincrement id,
the ``created_at`` timestamp in its own column and the record as JSON text.
"""
from __future__ import annotations

import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import List, Optional, Union

from ..errors import StorageError
from ..models.schema import CREATED_AT_FIELD
from .base import ResponseStore, StoredDocument


__all__ = ["SQLiteResponseStore"]

logger = logging.getLogger(__name__)


_SCHEMA = """
CREATE TABLE IF NOT EXISTS responses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    data TEXT NOT NULL
)
"""


class SQLiteResponseStore(ResponseStore):
    """
    SQLite persistence for survey responses.

    One row per response: the submission timestamp in its own column and
    the whole record as JSON text. Rows come back ordered by ``created_at``
    then insertion id.

    A single connection is shared by request threads and guarded by a lock.
    """

    name = "sqlite"

    def __init__(self, db_path: Union[str, Path]) -> None:
        super().__init__()
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def describe(self) -> str:
        return str(self.db_path)

    def _open(self) -> None:
        try:
            if str(self.db_path) != ":memory:":
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            conn.execute(_SCHEMA)
            conn.commit()
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open {self.db_path}: {e}") from e
        self._conn = conn

    def _close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _insert(self, record: StoredDocument) -> None:
        created_at = str(record.get(CREATED_AT_FIELD) or "")
        payload = json.dumps(record, ensure_ascii=False)
        with self._lock:
            try:
                with self._conn:
                    self._conn.execute(
                        "INSERT INTO responses (created_at, data) VALUES (?, ?)",
                        (created_at, payload),
                    )
            except sqlite3.Error as e:
                raise StorageError(f"Insert into {self.db_path} failed: {e}") from e

    def _list_all(self) -> List[StoredDocument]:
        with self._lock:
            try:
                rows = self._conn.execute(
                    "SELECT id, data FROM responses ORDER BY created_at, id"
                ).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"Query on {self.db_path} failed: {e}") from e

        records: List[StoredDocument] = []
        for row_id, data in rows:
            try:
                document = json.loads(data)
            except json.JSONDecodeError as e:
                raise StorageError(f"Row {row_id} holds invalid JSON") from e
            records.append(document)

        logger.debug(f"Read {len(records)} rows from {self.db_path}")
        return records
