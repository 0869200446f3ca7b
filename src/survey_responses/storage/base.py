"""
Response store interface.

A store is opened once with ``connect()``, receives records through
``insert()``, hands them back through ``list_all()`` and is released with
``close()``. Stores may be used as context managers.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from ..errors import StoreNotConnectedError


__all__ = ["ResponseStore", "StoredDocument"]

logger = logging.getLogger(__name__)

StoredDocument = Dict[str, Any]


class ResponseStore(ABC):
    """
    Abstract persistence collaborator for survey responses.

    Records are immutable once written; there is no update or delete.
    Backend failures are raised as ``StorageError``.

    Attributes:
        name: Backend name used by configuration.
    """

    name: str = "abstract"

    def __init__(self) -> None:
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        """Open the backend. Calling it again on an open store is a no-op."""
        if self._connected:
            return
        self._open()
        self._connected = True
        logger.info(f"Opened {self.name} response store: {self.describe()}")

    def close(self) -> None:
        """Release the backend. Safe to call on a closed store."""
        if not self._connected:
            return
        self._close()
        self._connected = False
        logger.info(f"Closed {self.name} response store")

    def insert(self, record: Mapping[str, Any]) -> None:
        """Persist one record."""
        self._require_connection()
        self._insert(dict(record))

    def list_all(self) -> List[StoredDocument]:
        """Return every stored record in the backend's natural order."""
        self._require_connection()
        return self._list_all()

    def describe(self) -> str:
        """Short human-readable location of the backend."""
        return self.name

    def _require_connection(self) -> None:
        if not self._connected:
            raise StoreNotConnectedError(
                f"{self.name} response store is not connected"
            )

    @abstractmethod
    def _open(self) -> None: ...

    @abstractmethod
    def _close(self) -> None: ...

    @abstractmethod
    def _insert(self, record: StoredDocument) -> None: ...

    @abstractmethod
    def _list_all(self) -> List[StoredDocument]: ...

    def __enter__(self) -> "ResponseStore":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
