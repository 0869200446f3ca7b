"""
Runtime configuration for the survey service.

Settings are read from environment variables. A ``.env`` file in the
working directory is loaded first when present, without overriding
variables that are already set.

Environment variables:
    PORT                 HTTP port (default 3000)
    HOST                 Bind address (default 0.0.0.0)
    FLASK_DEBUG          "true" enables the Flask debugger
    SURVEY_STORAGE       "file" (JSON lines) or "sqlite"
    SURVEY_DATA_FILE     Path of the JSON lines file
    SURVEY_DB_PATH       Path of the SQLite database
    LOG_LEVEL            Root logging level (default INFO)
    MAX_CONTENT_LENGTH   Largest accepted request body in bytes
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator


__all__ = ["LOG_LEVELS", "Settings", "StorageBackend"]


StorageBackend = Literal["file", "sqlite"]

_TRUE_VALUES = ("true", "1", "yes", "on")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """
    Service configuration.

    Attributes:
        host: Interface the HTTP server binds to.
        port: HTTP port.
        debug: Run Flask in debug mode.
        storage: Which response store backend to use.
        data_file: JSON lines file used by the ``file`` backend.
        db_path: Database file used by the ``sqlite`` backend.
        log_level: Logging level name, one of ``LOG_LEVELS``.
        max_content_length: Request body limit in bytes.
    """
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    debug: bool = False
    storage: StorageBackend = "file"
    data_file: Path = Path("data/responses.jsonl")
    db_path: Path = Path("data/survey.db")
    log_level: str = "INFO"
    max_content_length: int = Field(default=1024 * 1024, gt=0)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def logging_level(self) -> int:
        """Numeric ``logging`` level for ``log_level``."""
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        load_env_file: bool = True,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            load_env_file: Load a ``.env`` file into ``os.environ`` first.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))
        env = os.environ if environ is None else environ

        values: dict = {}
        if env.get("HOST"):
            values["host"] = env["HOST"]
        if env.get("PORT"):
            values["port"] = env["PORT"]
        if env.get("FLASK_DEBUG"):
            values["debug"] = env["FLASK_DEBUG"].lower() in _TRUE_VALUES
        if env.get("SURVEY_STORAGE"):
            values["storage"] = env["SURVEY_STORAGE"].lower()
        if env.get("SURVEY_DATA_FILE"):
            values["data_file"] = env["SURVEY_DATA_FILE"]
        if env.get("SURVEY_DB_PATH"):
            values["db_path"] = env["SURVEY_DB_PATH"]
        if env.get("LOG_LEVEL"):
            values["log_level"] = env["LOG_LEVEL"].upper()
        if env.get("MAX_CONTENT_LENGTH"):
            values["max_content_length"] = env["MAX_CONTENT_LENGTH"]
        return cls(**values)
