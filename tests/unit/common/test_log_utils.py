"""Unit tests for logging filters."""

import logging

from rhl_upload.common.log_utils import EndpointFilter


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, message, None, None)


def test_endpoint_filter_drops_matching_path():
    health_filter = EndpointFilter(path="/health")

    assert health_filter.filter(_record('127.0.0.1 - "GET /health HTTP/1.1" 200')) is False
    assert health_filter.filter(_record('127.0.0.1 - "POST /upload HTTP/1.1" 201')) is True
