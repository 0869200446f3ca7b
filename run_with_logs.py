#!/usr/bin/env python
"""
Run the survey web server, logging to the console and to a file in logs/.

The level comes from LOG_LEVEL (or .env), the same as `survey-responses serve`.
"""
import os
import sys
import logging
from datetime import datetime

sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from survey_responses.config import Settings  # noqa: E402
from survey_responses.errors import StorageError  # noqa: E402
from survey_responses.main import LOG_FORMAT  # noqa: E402
from survey_responses.storage import create_store  # noqa: E402

LOG_DIR = os.path.join(os.path.dirname(__file__), 'logs')

logger = logging.getLogger("survey_responses.run_with_logs")


def configure_logging(settings: Settings) -> str:
    """Send records at ``settings.log_level`` to stdout and a timestamped file."""
    os.makedirs(LOG_DIR, exist_ok=True)
    log_file = os.path.join(LOG_DIR, f'survey_responses_{datetime.now():%Y%m%d_%H%M%S}.log')
    logging.basicConfig(
        level=settings.logging_level,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout),
        ],
    )
    return log_file


def main() -> int:
    settings = Settings.from_env()
    log_file = configure_logging(settings)
    logger.info(f"Starting survey web server on port {settings.port} ({settings.storage} storage)")
    logger.info(f"Log file: {log_file}, level {settings.log_level}")

    from survey_responses.web import create_app

    store = create_store(settings)
    try:
        app = create_app(settings, store=store)
        app.run(host=settings.host, port=settings.port, debug=False, threaded=True)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except StorageError as e:
        logger.error(f"Response store unavailable: {e}")
        return 1
    finally:
        store.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
