"""
Tagged answer values and request body parsing.

Request bodies are resolved here, once, into ``Scalar`` (one answer) or
``Multi`` (an ordered multi-select answer). Values that cannot be a survey
answer, such as JSON objects or lists nested inside a list, degrade to
empty strings instead of being stringified.

Example Usage:
    >>> from survey_responses.models.submission import parse_json_body
    >>> submission = parse_json_body({"infoSources": ["Reviews", "Friends"]})
    >>> submission["infoSources"].flatten()
    'Reviews; Friends'
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Tuple, Union

from pydantic import BaseModel, Field


__all__ = [
    "MULTI_VALUE_SEPARATOR",
    "Scalar",
    "Multi",
    "FieldValue",
    "RawSubmission",
    "to_field_value",
    "to_text",
    "parse_json_body",
    "parse_form",
]


# Joins the selections of a multi-select question into one cell
MULTI_VALUE_SEPARATOR = "; "


class Scalar(BaseModel):
    """A single answer (text input, radio button, select)."""
    value: str = ""

    model_config = {"frozen": True}

    def flatten(self) -> str:
        return self.value


class Multi(BaseModel):
    """
    An ordered list of answers from a multi-select input.

    The order is the order the browser submitted the checked options in.
    It is never sorted or deduplicated.
    """
    values: Tuple[str, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    def flatten(self) -> str:
        return MULTI_VALUE_SEPARATOR.join(self.values)


FieldValue = Union[Scalar, Multi]
RawSubmission = Dict[str, FieldValue]


def to_text(value: Any) -> str:
    """
    Spell a single answer value as text.

    Booleans use JSON spelling and integral floats drop their fraction, so
    ``5.0`` reads ``"5"``. ``None``, mappings and sequences are not single
    answers and become ``""``.

    Example:
        >>> to_text(True), to_text(5.0), to_text({"x": 1})
        ('true', '5', '')
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (Mapping, list, tuple, set)):
        return ""
    return str(value)


def to_field_value(value: Any) -> FieldValue:
    """
    Resolve an untyped request value into a tagged value.

    Never raises: ``None`` and other values that cannot be an answer become
    empty strings, and a list or tuple becomes a ``Multi`` whose nested
    containers are emptied.

    Example:
        >>> to_field_value(["a", "b"]).flatten()
        'a; b'
        >>> to_field_value(None)
        Scalar(value='')
    """
    if isinstance(value, (Scalar, Multi)):
        return value
    if isinstance(value, (list, tuple)):
        return Multi(values=tuple(to_text(item) for item in value))
    return Scalar(value=to_text(value))


def parse_json_body(body: Any) -> RawSubmission:
    """
    Convert a decoded JSON request body into a raw submission.

    Only a JSON object carries answers; any other document (array, string,
    null) is treated as an empty submission.
    """
    if not isinstance(body, Mapping):
        return {}
    return {str(key): to_field_value(value) for key, value in body.items()}


def parse_form(form: Any) -> RawSubmission:
    """
    Convert browser form data into a raw submission.

    ``form`` is a werkzeug ``MultiDict`` (or anything with ``keys()`` and
    ``getlist()``). Empty values are dropped, a key sent once becomes a
    ``Scalar`` and a key sent several times (checkbox groups) becomes a
    ``Multi`` in submission order.
    """
    submission: RawSubmission = {}
    for key in _unique(form.keys()):
        values = [value for value in form.getlist(key) if value]
        if not values:
            continue
        if len(values) == 1:
            submission[key] = Scalar(value=values[0])
        else:
            submission[key] = Multi(values=tuple(values))
    return submission


def _unique(keys: Iterable[str]) -> list[str]:
    seen: Dict[str, None] = {}
    for key in keys:
        seen.setdefault(key, None)
    return list(seen)
