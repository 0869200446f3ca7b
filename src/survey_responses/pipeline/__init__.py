"""
Normalization and CSV serialization of survey responses.

This package contains:
- normalizer: Fills missing fields, flattens multi-select answers, maps labels
- csv_export: Cell escaping and CSV document rendering
"""
from .csv_export import CSV_MIMETYPE, escape_csv_cell, to_csv
from .normalizer import (
    NormalizedRecord,
    coerce_stored,
    from_labeled,
    normalize,
    project,
    to_labeled,
)

__all__ = [
    "CSV_MIMETYPE",
    "NormalizedRecord",
    "coerce_stored",
    "escape_csv_cell",
    "from_labeled",
    "normalize",
    "project",
    "to_csv",
    "to_labeled",
]
