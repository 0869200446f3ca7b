"""
Flat-file response store.

Each record is one JSON object on its own line. Appends are serialized
with a process-local lock; concurrent writers in other processes are not
coordinated.
"""
from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import List, Union

from ..errors import StorageError
from .base import ResponseStore, StoredDocument


__all__ = ["JsonLinesResponseStore"]

logger = logging.getLogger(__name__)


class JsonLinesResponseStore(ResponseStore):
    """
    Append-only JSON lines file.

    ``list_all`` returns records in file (insertion) order. A missing file
    reads as an empty store.

    Attributes:
        path: Location of the ``.jsonl`` file.
    """

    name = "file"

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)
        self._lock = threading.Lock()

    def describe(self) -> str:
        return str(self.path)

    def _open(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create {self.path.parent}: {e}") from e

    def _close(self) -> None:
        pass

    def _insert(self, record: StoredDocument) -> None:
        line = json.dumps(record, ensure_ascii=False)
        with self._lock:
            try:
                with self.path.open("a", encoding="utf-8") as handle:
                    handle.write(line + "\n")
            except OSError as e:
                raise StorageError(f"Cannot write to {self.path}: {e}") from e

    def _list_all(self) -> List[StoredDocument]:
        with self._lock:
            try:
                with self.path.open("r", encoding="utf-8") as handle:
                    lines = handle.readlines()
            except FileNotFoundError:
                return []
            except OSError as e:
                raise StorageError(f"Cannot read {self.path}: {e}") from e

        records: List[StoredDocument] = []
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                document = json.loads(line)
            except json.JSONDecodeError as e:
                raise StorageError(f"{self.path}:{number}: invalid JSON record") from e
            if not isinstance(document, dict):
                raise StorageError(f"{self.path}:{number}: record is not an object")
            records.append(document)

        logger.debug(f"Read {len(records)} records from {self.path}")
        return records
