"""Logging utilities for structured request logging.

Provides:
- configure_logging(): dictConfig setup from logging.json / logging-dev.json
- ExtraFieldsFilter: adds trace ID and HTTP details to log records
- EndpointFilter: drops access-log noise for specific endpoints
"""

import json
import logging
import logging.config
import os
from pathlib import Path

from rhl_upload.common.tracing import ctx_request, ctx_response, ctx_trace_id

logger = logging.getLogger(__name__)


def is_deployed() -> bool:
    """True when running outside a local development environment."""
    return os.environ.get("ENVIRONMENT", "local").lower() not in ("local", "dev", "development")


def configure_logging() -> None:
    """Configure logging based on environment.

    Deployed: Uses logging.json with JSON output, trace ID injection and
    health check filtering.

    Locally: Uses logging-dev.json with simple text format for readability.
    """
    config_file = "logging.json" if is_deployed() else "logging-dev.json"
    config_path = Path(__file__).parent.parent.parent / config_file

    if config_path.exists():
        with open(config_path) as f:
            logging.config.dictConfig(json.load(f))
    else:
        # Fallback to basic config if file not found
        logging.basicConfig(
            level=logging.INFO,
            format=(
                '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
                '"logger": "%(name)s", "message": "%(message)s"}'
            ),
            datefmt="%Y-%m-%dT%H:%M:%S",
        )


class ExtraFieldsFilter(logging.Filter):
    """Adds request context fields to log records.

    Enhances log records with:
    - trace_id: request trace ID (empty outside a request)
    - url.full: Full request URL
    - http.request.method: HTTP method
    - http.response.status_code: Response status code
    """

    def filter(self, record: logging.LogRecord) -> bool:
        req = ctx_request.get()
        resp = ctx_response.get()

        record.trace_id = ctx_trace_id.get()

        http = {}
        if req:
            record.url = {"full": req.get("url")}
            http["request"] = {"method": req.get("method")}
        if resp:
            http["response"] = resp
        if http:
            record.http = http

        return True


class EndpointFilter(logging.Filter):
    """Drops access log lines that mention one request path, e.g. "/health"."""

    def __init__(self, path: str, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._path = path

    def filter(self, record: logging.LogRecord) -> bool:
        return self._path not in record.getMessage()
