

# =============================================================================
# Schema Registry
# Used for: Column order and header labels of every record and export
# =============================================================================
from .schema import (
    CREATED_AT_FIELD,  # Server-stamped submission time
    FieldDefinition,  # (id, label) pair
    SCHEMA_FIELDS,  # Ordered field definitions
    field_ids,
    id_for_label,
    label_for,
    labels,
)

# =============================================================================
# Submission Values
# Used for: Resolving request bodies into tagged values at the boundary
# =============================================================================
from .submission import (
    FieldValue,  # Scalar | Multi
    Multi,  # Multi-select answer
    MULTI_VALUE_SEPARATOR,
    RawSubmission,
    Scalar,  # Single answer
    parse_form,
    parse_json_body,
    to_field_value,
    to_text,
)

# =============================================================================
# Public API
# =============================================================================
__all__ = [
    # Schema
    "CREATED_AT_FIELD",
    "FieldDefinition",
    "SCHEMA_FIELDS",
    "field_ids",
    "id_for_label",
    "label_for",
    "labels",

    # Submission values
    "FieldValue",
    "Multi",
    "MULTI_VALUE_SEPARATOR",
    "RawSubmission",
    "Scalar",
    "parse_form",
    "parse_json_body",
    "to_field_value",
    "to_text",
]
