"""Exceptions raised at the survey service boundaries."""
from __future__ import annotations


__all__ = [
    "SurveyResponsesError",
    "EmptySubmissionError",
    "StorageError",
    "StoreNotConnectedError",
]


class SurveyResponsesError(Exception):
    """Base class for errors raised by this package."""


class EmptySubmissionError(SurveyResponsesError):
    """The submitted body carried no answers at all."""

    def __init__(self, message: str = "Submission is empty.") -> None:
        super().__init__(message)


class StorageError(SurveyResponsesError):
    """A response store failed to read or write."""


class StoreNotConnectedError(StorageError):
    """A store operation was attempted before ``connect()``."""
