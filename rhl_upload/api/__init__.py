"""HTTP API for shapefile archive validation and upload.

Each feature has its own router module, assembled here into a single
FastAPI app.

Endpoints:
    GET  /health             - Health check
    POST /validate-shapefile - Validate an archive already in an activity bucket
    POST /upload             - Validate a new archive and store it
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rhl_upload.api.health_router import router as health_router
from rhl_upload.api.upload_router import router as upload_router
from rhl_upload.api.validate_router import router as validate_router
from rhl_upload.common.tracing import TraceIdMiddleware
from rhl_upload.config import ApiServerConfig
from rhl_upload.models.enums import ErrorKind
from rhl_upload.validation import ArchiveValidationError

logger = logging.getLogger(__name__)

app = FastAPI(title="RHL Shapefile Upload API")

config = ApiServerConfig()
app.add_middleware(TraceIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
    allow_credentials=True,
)

app.include_router(health_router)
app.include_router(validate_router)
app.include_router(upload_router)


@app.exception_handler(ArchiveValidationError)
async def archive_validation_error_handler(_request: Request, exc: ArchiveValidationError):
    """Map aborting validator failures to error responses."""
    status_code = 504 if exc.kind == ErrorKind.TIMEOUT else 400
    logger.warning(f"Validation aborted ({exc.kind}): {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "error_kind": exc.kind.value},
    )
