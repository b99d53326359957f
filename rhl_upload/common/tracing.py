"""Request tracing support.

Inbound requests may carry an `x-request-id` header (set by the upload
frontend or the reverse proxy). This module provides middleware and context
variables that keep the ID, and basic request/response details, available to
log filters for the lifetime of the request.
"""

import contextvars
from logging import getLogger
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = getLogger(__name__)

TRACE_HEADER = "x-request-id"

# Context variables for request-scoped tracing data
ctx_trace_id: contextvars.ContextVar[str] = contextvars.ContextVar("trace_id", default="")
ctx_request: contextvars.ContextVar[dict | None] = contextvars.ContextVar("request", default=None)
ctx_response: contextvars.ContextVar[dict | None] = contextvars.ContextVar(
    "response", default=None
)


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and propagate request trace IDs.

    Uses the inbound `x-request-id` header when present, otherwise generates
    one, and echoes it on the response so clients can quote it in reports.
    """

    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get(TRACE_HEADER) or uuid4().hex
        ctx_trace_id.set(trace_id)
        ctx_request.set({"url": str(request.url), "method": request.method})

        logger.info(f"{request.method} {request.url.path}")
        response = await call_next(request)
        ctx_response.set({"status_code": response.status_code})
        response.headers[TRACE_HEADER] = trace_id
        return response
