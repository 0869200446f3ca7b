"""
Survey Responses - survey collection service with CSV export.

Submissions from the web form are normalized against a fixed field schema,
stored in a JSON lines file or SQLite database, and exported on demand as
CSV with the question text as column headers.

Quick Start:
    >>> from survey_responses import ResponseCollector, normalize, to_csv
    >>>
    >>> record = normalize({"purchaseChannel": "Store A"})
    >>> print(to_csv([record]))

CLI Usage:
    $ survey-responses serve
    $ survey-responses export -o responses.csv

Modules:
    - models: Schema registry and submission value types
    - pipeline: Normalization and CSV rendering
    - storage: Response store backends
    - web: Flask application
"""
__version__ = "0.1.0"

from .collector import ResponseCollector
from .pipeline.csv_export import escape_csv_cell, to_csv
from .pipeline.normalizer import normalize, to_labeled

__all__ = [
    "ResponseCollector",
    "escape_csv_cell",
    "normalize",
    "to_csv",
    "to_labeled",
    "__version__",
]
