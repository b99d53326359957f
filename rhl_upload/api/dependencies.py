"""Shared request dependencies and the bounded validation runner."""

import asyncio
import logging
from collections.abc import Callable

from starlette.concurrency import run_in_threadpool

from rhl_upload.config import ApiServerConfig
from rhl_upload.models.archive import ValidationResult
from rhl_upload.models.enums import Activity
from rhl_upload.storage import ShapefileStorage, create_storage
from rhl_upload.validation import ValidationTimeoutError, validate

logger = logging.getLogger(__name__)

StorageFactory = Callable[[str], ShapefileStorage]


def get_storage_factory() -> StorageFactory:
    """Return the factory used to build a storage backend per bucket."""
    return create_storage


def get_api_config() -> ApiServerConfig:
    return ApiServerConfig()


async def run_validation(
    archive_bytes: bytes, activity: Activity, timeout_seconds: float
) -> ValidationResult:
    """Validate an archive in a worker thread, bounded by ``timeout_seconds``.

    Raises:
        ValidationTimeoutError: If validation does not finish in time
        ArchiveValidationError: For malformed archives or archives without geometry
    """
    try:
        result = await asyncio.wait_for(
            run_in_threadpool(validate, archive_bytes, activity), timeout=timeout_seconds
        )
    except TimeoutError as e:
        msg = f"Validation did not finish within {timeout_seconds:g} seconds"
        raise ValidationTimeoutError(msg) from e

    outcome = "valid" if result.valid else "invalid"
    logger.info(f"Archive validated for {activity.value}: {outcome} ({len(result.units)} shapefiles)")
    return result
