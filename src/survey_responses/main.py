"""
Survey Responses Main Module - Command Line Interface.

CLI Usage:
    $ survey-responses serve --port 3000 --storage sqlite
    $ survey-responses export -o responses.csv
    $ survey-responses fields
    $ python -m survey_responses --version
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

import click
from pydantic import ValidationError

from . import __version__
from .collector import ResponseCollector
from .config import Settings
from .errors import StorageError
from .models.schema import SCHEMA_FIELDS
from .pipeline.csv_export import to_csv
from .storage import create_store


__all__ = ["cli", "run_cli"]

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

STORAGE_CHOICE = click.Choice(["file", "sqlite"], case_sensitive=False)


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.logging_level, format=LOG_FORMAT)


def _load_settings(**overrides) -> Settings:
    """Settings from the environment with CLI options applied on top."""
    try:
        settings = Settings.from_env()
        changes = {key: value for key, value in overrides.items() if value is not None}
        if changes:
            settings = Settings(**{**settings.model_dump(), **changes})
    except ValidationError as e:
        click.echo(click.style(f"[ERROR] Invalid configuration: {e}", fg="red"), err=True)
        sys.exit(1)
    return settings


# =============================================================================
# CLI INTERFACE
# =============================================================================

@click.group()
@click.version_option(version=__version__, prog_name="survey-responses")
def cli():
    """
    Survey Responses - collect survey submissions and export them as CSV.
    """
    pass


@cli.command()
@click.option("--host", default=None, help="Bind address (default: HOST or 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Port to listen on (default: PORT or 3000).")
@click.option("--storage", type=STORAGE_CHOICE, default=None, help="Response store backend.")
@click.option("--debug", is_flag=True, default=False, help="Run Flask in debug mode.")
def serve(host: Optional[str], port: Optional[int], storage: Optional[str], debug: bool):
    """
    Run the survey web server.

    The response store is opened before the server starts and closed when
    it stops.
    """
    settings = _load_settings(
        host=host,
        port=port,
        storage=storage.lower() if storage else None,
        debug=True if debug else None,
    )
    _configure_logging(settings)

    from .web.app import create_app

    store = create_store(settings)
    try:
        store.connect()
    except StorageError as e:
        click.echo(click.style(f"[ERROR] Response store unavailable: {e}", fg="red"), err=True)
        sys.exit(1)

    try:
        app = create_app(settings, store=store)
        click.echo(f"Survey app listening on http://localhost:{settings.port}")
        app.run(host=settings.host, port=settings.port, debug=settings.debug, threaded=True)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    finally:
        store.close()


@cli.command()
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the CSV to this file instead of stdout.",
)
@click.option("--storage", type=STORAGE_CHOICE, default=None, help="Response store backend.")
def export(output: Optional[str], storage: Optional[str]):
    """
    Export every stored response as CSV.

    Example:

        $ survey-responses export -o responses.csv
    """
    settings = _load_settings(storage=storage.lower() if storage else None)
    _configure_logging(settings)

    try:
        with create_store(settings) as store:
            records = ResponseCollector(store).records()
    except StorageError as e:
        click.echo(click.style(f"[ERROR] Failed to load responses: {e}", fg="red"), err=True)
        sys.exit(1)

    body = to_csv(records)
    if output:
        with open(output, "w", encoding="utf-8", newline="") as handle:
            handle.write(body)
        click.echo(f"Wrote {len(records)} responses to {output}", err=True)
    else:
        click.echo(body, nl=False)


@cli.command()
def fields():
    """List survey field identifiers and labels in column order."""
    for position, field in enumerate(SCHEMA_FIELDS, start=1):
        click.echo(f"{position:2d}. {click.style(field.id, bold=True)}: {field.label}")


def run_cli():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    run_cli()
