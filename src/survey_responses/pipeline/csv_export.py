"""
CSV rendering for survey exports.

Cells containing a double quote, comma or newline are wrapped in double
quotes with internal quotes doubled. Everything else is emitted verbatim.
Rows are written in the order given; this module never sorts.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from ..models.schema import field_ids, labels
from ..models.submission import to_text


__all__ = [
    "CSV_MIMETYPE",
    "escape_csv_cell",
    "to_csv",
]


CSV_MIMETYPE = "text/csv"

_NEEDS_QUOTING = re.compile(r'[",\n]')


def escape_csv_cell(value: Any) -> str:
    """
    Escape a single CSV cell.

    Values are spelled through ``to_text``, so ``None`` is empty and
    booleans read ``true``/``false`` as they do in stored records.

    Example:
        >>> escape_csv_cell('He said "hi", then left')
        '"He said ""hi"", then left"'
        >>> escape_csv_cell(None)
        ''
    """
    text = to_text(value)
    if _NEEDS_QUOTING.search(text):
        return '"' + text.replace('"', '""') + '"'
    return text


def _line(cells: Iterable[Any]) -> str:
    return ",".join(escape_csv_cell(cell) for cell in cells) + "\n"


def to_csv(records: Iterable[Mapping[str, Any]]) -> str:
    """
    Render normalized records as a CSV document.

    The header holds the schema labels. Each record contributes one line
    with its schema field values; unregistered keys are ignored and missing
    fields render as empty cells.

    Args:
        records: Normalized records, already in export order.

    Returns:
        The CSV text. With no records this is the header line alone.
    """
    order = field_ids()
    lines = [_line(labels())]
    for record in records:
        lines.append(_line(record.get(field_id) for field_id in order))
    return "".join(lines)
