"""
Response normalization.

Turns a raw submission (identifier -> string or list of strings) into a
normalized record where every schema field holds exactly one string:

1. The submission is shallow-copied and merged with ``extra`` (extra wins).
2. Missing schema fields default to ``""``.
3. Multi-valued answers are joined with ``"; "`` in their original order.

Normalization is total. Malformed values degrade to empty strings.

Example Usage:
    >>> from survey_responses.pipeline.normalizer import normalize
    >>>
    >>> record = normalize({"postPurchaseActions": ["Left a review", "Shared on social"]})
    >>> record["postPurchaseActions"]
    'Left a review; Shared on social'
    >>> record["purchaseChannel"]
    ''
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..models.schema import SCHEMA_FIELDS, field_ids, id_for_label
from ..models.submission import to_field_value


__all__ = [
    "NormalizedRecord",
    "normalize",
    "project",
    "to_labeled",
    "from_labeled",
    "coerce_stored",
]


NormalizedRecord = Dict[str, str]


def normalize(
    raw: Mapping[str, Any],
    extra: Optional[Mapping[str, Any]] = None,
) -> NormalizedRecord:
    """
    Normalize a raw submission.

    Args:
        raw: Submitted answers. Values may be tagged values, strings,
            sequences of strings or ``None``.
        extra: Server-side fields merged over ``raw`` (e.g. ``created_at``).

    Returns:
        A new dict holding every schema field plus any unregistered keys
        from the input, all flattened to strings.
    """
    merged: Dict[str, Any] = dict(raw)
    if extra:
        merged.update(extra)

    normalized: NormalizedRecord = {
        field_id: to_field_value(merged.get(field_id)).flatten()
        for field_id in field_ids()
    }
    for key, value in merged.items():
        if key not in normalized:
            normalized[key] = to_field_value(value).flatten()
    return normalized


def project(record: Mapping[str, Any]) -> NormalizedRecord:
    """Schema-ordered copy of ``record`` with unregistered keys dropped."""
    return {
        field_id: to_field_value(record.get(field_id)).flatten()
        for field_id in field_ids()
    }


def to_labeled(record: Mapping[str, Any]) -> Dict[str, str]:
    """Re-key a normalized record by field label, in schema order."""
    return {
        field.label: to_field_value(record.get(field.id)).flatten()
        for field in SCHEMA_FIELDS
    }


def from_labeled(document: Mapping[str, Any]) -> NormalizedRecord:
    """
    Read a stored document back into an identifier-keyed record.

    Each schema field is looked up by its label first, then by its
    identifier, so documents written in either representation (or a mix)
    read back the same way.
    """
    record: NormalizedRecord = {}
    for field in SCHEMA_FIELDS:
        if field.label in document:
            value = document[field.label]
        else:
            value = document.get(field.id)
        record[field.id] = to_field_value(value).flatten()
    return record


def coerce_stored(document: Mapping[str, Any]) -> NormalizedRecord:
    """
    Normalize a document returned by a store.

    Identifier-keyed documents are projected directly. Documents carrying
    any schema label as a key go through :func:`from_labeled`.
    """
    if any(id_for_label(key) is not None for key in document):
        return from_labeled(document)
    return project(document)
