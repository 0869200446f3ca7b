"""
Survey response collection service.

Coordinates the submission and export paths:

1. Submission: reject empty bodies, stamp ``created_at``, normalize,
   persist the schema-ordered record.
2. Export: read every stored record, map it back to field identifiers,
   order by ``created_at`` and render CSV.

Example Usage:
    >>> from survey_responses.collector import ResponseCollector
    >>> from survey_responses.storage import JsonLinesResponseStore
    >>>
    >>> with JsonLinesResponseStore("responses.jsonl") as store:
    ...     collector = ResponseCollector(store)
    ...     collector.submit({"purchaseChannel": "Store A"})
    ...     print(collector.export_csv())
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional

from .errors import EmptySubmissionError
from .models.schema import CREATED_AT_FIELD
from .pipeline.csv_export import to_csv
from .pipeline.normalizer import NormalizedRecord, coerce_stored, normalize, project
from .storage.base import ResponseStore


__all__ = ["ResponseCollector", "utc_timestamp"]

logger = logging.getLogger(__name__)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """
    ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix.

    Example:
        >>> utc_timestamp(datetime(2024, 1, 15, 14, 32, tzinfo=timezone.utc))
        '2024-01-15T14:32:00.000Z'
    """
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class ResponseCollector:
    """
    Submission and export workflow over a response store.

    The collector holds no state of its own besides its collaborators, so
    one instance can serve concurrent requests.

    Attributes:
        store: Connected persistence backend.
        clock: Returns the current time; used for ``created_at``.
    """

    def __init__(
        self,
        store: ResponseStore,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def submit(self, raw: Mapping[str, Any]) -> NormalizedRecord:
        """
        Store one survey response.

        Args:
            raw: Submitted answers keyed by field identifier.

        Returns:
            The record as persisted.

        Raises:
            EmptySubmissionError: If ``raw`` has no keys.
            StorageError: If the store fails. Not retried.
        """
        if not raw:
            raise EmptySubmissionError()

        created_at = utc_timestamp(self.clock())
        normalized = normalize(raw, extra={CREATED_AT_FIELD: created_at})
        record = project(normalized)

        ignored = sorted(set(normalized) - set(record))
        if ignored:
            logger.debug(f"Ignoring unregistered fields: {', '.join(ignored)}")

        self.store.insert(record)
        logger.info(f"Stored response submitted at {created_at}")
        return record

    def records(self) -> List[NormalizedRecord]:
        """Every stored response, identifier-keyed, oldest first."""
        documents = self.store.list_all()
        records = [coerce_stored(document) for document in documents]
        # stable: equal timestamps keep the store's order
        records.sort(key=lambda record: record[CREATED_AT_FIELD])
        return records

    def export_csv(self) -> str:
        """Render every stored response as CSV."""
        records = self.records()
        logger.info(f"Exporting {len(records)} responses as CSV")
        return to_csv(records)
