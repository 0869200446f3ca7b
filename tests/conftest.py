"""
Pytest configuration and fixtures for survey_responses tests.

This module provides reusable fixtures including:
- Temporary JSON lines and SQLite stores
- A Flask app and test client bound to a temporary store
- Sample submissions
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from survey_responses.collector import ResponseCollector
from survey_responses.config import Settings
from survey_responses.storage import JsonLinesResponseStore, SQLiteResponseStore
from survey_responses.web import create_app


# =============================================================================
# STORE FIXTURES
# =============================================================================

@pytest.fixture
def jsonl_store(tmp_path: Path):
    """Connected JSON lines store in a temporary directory."""
    store = JsonLinesResponseStore(tmp_path / "data" / "responses.jsonl")
    store.connect()
    yield store
    store.close()


@pytest.fixture
def sqlite_store(tmp_path: Path):
    """Connected SQLite store in a temporary directory."""
    store = SQLiteResponseStore(tmp_path / "data" / "survey.db")
    store.connect()
    yield store
    store.close()


@pytest.fixture(params=["file", "sqlite"])
def any_store(request, jsonl_store, sqlite_store):
    """Each store backend in turn."""
    return jsonl_store if request.param == "file" else sqlite_store


class FakeClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 15, 14, 32, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def collector(jsonl_store, clock) -> ResponseCollector:
    return ResponseCollector(jsonl_store, clock=clock)


# =============================================================================
# WEB FIXTURES
# =============================================================================

@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        storage="file",
        data_file=tmp_path / "web" / "responses.jsonl",
        db_path=tmp_path / "web" / "survey.db",
    )


@pytest.fixture
def app(settings: Settings, jsonl_store):
    app = create_app(settings, store=jsonl_store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


# =============================================================================
# SAMPLE DATA
# =============================================================================

@pytest.fixture
def sample_submission() -> dict:
    """Submission from the end-to-end scenario."""
    return {
        "purchaseChannel": "Store A",
        "postPurchaseActions": ["Left a review", "Shared on social"],
    }


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (touches the filesystem)"
    )
