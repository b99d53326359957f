"""Validation of archives that were already uploaded to an activity bucket."""

import logging
from contextlib import closing
from pathlib import PurePosixPath

from botocore.exceptions import ClientError
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from rhl_upload.api.dependencies import (
    StorageFactory,
    get_api_config,
    get_storage_factory,
    run_validation,
)
from rhl_upload.config import ApiServerConfig
from rhl_upload.models.enums import Activity
from rhl_upload.storage import S3Storage, StorageError
from rhl_upload.validation import check_upload_target

logger = logging.getLogger(__name__)

router = APIRouter()


class ValidateShapefileRequest(BaseModel):
    """Request body for validating an archive in storage."""

    zip_path: str | None = Field(default=None, description="Object path, shapefiles/<name>.zip")
    bucket: str | None = Field(default=None, description="Activity bucket, e.g. rhlvegetatif")


@router.post("/validate-shapefile")
async def validate_shapefile(
    request: ValidateShapefileRequest,
    storage_factory: StorageFactory = Depends(get_storage_factory),
    api_config: ApiServerConfig = Depends(get_api_config),
):
    """Validate a shapefile archive stored under ``shapefiles/`` in an activity bucket.

    Returns:
        200 with the confirmation report when every shapefile is valid

    Error responses:
        400: Missing or invalid parameters, malformed archive, no .shp entries
        404: Archive not found (includes a listing of the bucket root for S3)
        422: Archive found but one or more shapefiles are invalid
        500: Storage backend failure
        504: Validation timed out
    """
    logger.info(f"Validation request: zip_path={request.zip_path} bucket={request.bucket}")

    errors = check_upload_target(request.bucket, request.zip_path)
    if errors:
        logger.error(f"Invalid validation request: {errors}")
        return JSONResponse(status_code=400, content={"error": errors[0].message})

    file_name = PurePosixPath(request.zip_path).name
    activity = Activity.from_bucket(request.bucket)

    try:
        with closing(storage_factory(request.bucket)) as storage:
            found = await run_in_threadpool(storage.exists, request.zip_path)
            if not found:
                root_contents = []
                if isinstance(storage, S3Storage):
                    root_contents = await run_in_threadpool(storage.list_shapefiles, "")
                return JSONResponse(
                    status_code=404,
                    content={
                        "error": f"File {file_name} not found in {request.bucket}/shapefiles",
                        "rootContents": root_contents,
                    },
                )
            archive_bytes = await run_in_threadpool(storage.download, request.zip_path)
    except (ClientError, StorageError, ValueError) as e:
        logger.error(f"Storage error while fetching {request.zip_path}: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to access storage", "details": str(e)},
        )

    result = await run_validation(archive_bytes, activity, api_config.validation_timeout_seconds)
    if not result.valid:
        return JSONResponse(
            status_code=422,
            content={"error": "Shapefile validation failed", "report": result.report},
        )

    return {
        "message": "Validation succeeded",
        "fileName": file_name,
        "bucket": request.bucket,
        "path": request.zip_path,
        "report": result.report,
    }
