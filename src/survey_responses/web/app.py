"""
Survey Web Application.

A Flask app that serves the survey form, accepts submissions and exports
every stored response as CSV.

Routes:
    GET  /                    Survey form
    GET  /api/health          Health check
    POST /api/responses       Store a response (JSON or form encoded)
    GET  /api/responses       CSV export
    GET  /api/responses.csv   CSV export

Run with:
    survey-responses serve --port 3000
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from flask import (
    Flask,
    Response,
    current_app,
    jsonify,
    redirect,
    render_template,
    request,
    url_for,
)

from ..collector import ResponseCollector
from ..config import Settings
from ..errors import EmptySubmissionError
from ..models.schema import CREATED_AT_FIELD, SCHEMA_FIELDS
from ..models.submission import RawSubmission, parse_form, parse_json_body
from ..pipeline.csv_export import CSV_MIMETYPE
from ..storage import ResponseStore, create_store


__all__ = ["create_app", "EXTENSION_KEY"]

logger = logging.getLogger(__name__)

EXTENSION_KEY = "survey_responses"

# Text inputs rendered for each multi-select question
MULTI_INPUTS = 3


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ResponseStore] = None,
) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Service configuration; read from the environment if omitted.
        store: Response store; built from ``settings`` if omitted. The store
            is connected here if it is not already open. Closing it is left
            to the caller.

    Returns:
        Configured Flask app with the collector in
        ``app.extensions["survey_responses"]``.
    """
    settings = settings or Settings.from_env()
    if store is None:
        store = create_store(settings)
    store.connect()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_content_length
    app.config["SURVEY_SETTINGS"] = settings
    app.extensions[EXTENSION_KEY] = ResponseCollector(store)

    app.add_url_rule("/", "index", index)
    app.add_url_rule("/api/health", "health", health)
    app.add_url_rule("/api/responses", "submit_response", submit_response, methods=["POST"])
    app.add_url_rule("/api/responses", "export_responses", export_responses, methods=["GET"])
    app.add_url_rule("/api/responses.csv", "export_responses_csv", export_responses, methods=["GET"])

    logger.info(f"Survey app ready with {store.name} storage")
    return app


def get_collector() -> ResponseCollector:
    """Collector bound to the current app."""
    return current_app.extensions[EXTENSION_KEY]


# =============================================================================
# ROUTES
# =============================================================================

def index():
    """Render the survey form."""
    fields = [field for field in SCHEMA_FIELDS if field.id != CREATED_AT_FIELD]
    return render_template(
        "index.html",
        fields=fields,
        multi_inputs=MULTI_INPUTS,
        status=request.args.get("status"),
    )


def health():
    """Health check endpoint."""
    return jsonify({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


def submit_response():
    """
    Store one survey response.

    Accepts a JSON object or browser form data. Returns 201 on success,
    400 for an empty submission and 500 if the store fails. A plain browser
    form post is redirected back to the form with a status message instead.
    """
    submission = _read_submission()
    from_browser = _wants_html()

    try:
        get_collector().submit(submission)
    except EmptySubmissionError:
        if from_browser:
            return redirect(url_for("index", status="empty"), code=303)
        return jsonify({"message": "Submission is empty."}), 400
    except Exception:
        logger.exception("Failed to save response")
        return jsonify({"message": "Failed to save response."}), 500

    if from_browser:
        return redirect(url_for("index", status="saved"), code=303)
    return jsonify({"message": "Response saved."}), 201


def export_responses():
    """Return every stored response as a CSV document."""
    try:
        body = get_collector().export_csv()
    except Exception:
        logger.exception("Failed to load responses")
        return jsonify({"message": "Failed to load responses."}), 500

    return Response(body, mimetype=CSV_MIMETYPE)


def _read_submission() -> RawSubmission:
    if request.is_json:
        return parse_json_body(request.get_json(silent=True))
    return parse_form(request.form)


def _wants_html() -> bool:
    if request.is_json:
        return False
    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    return best == "text/html"
