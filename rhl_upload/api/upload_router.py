"""Upload endpoint: validate a new archive, then store it."""

import logging
from contextlib import closing

from botocore.exceptions import ClientError
from fastapi import APIRouter, Depends, Form, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from rhl_upload.api.dependencies import (
    StorageFactory,
    get_api_config,
    get_storage_factory,
    run_validation,
)
from rhl_upload.config import ApiServerConfig, UploadRulesConfig
from rhl_upload.models.enums import Activity
from rhl_upload.storage import StorageError
from rhl_upload.validation import build_object_key, check_upload_parameters

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", status_code=201)
async def upload_shapefile(
    file: UploadFile,
    activity: str = Form(...),
    bpdas: str = Form(...),
    year: int = Form(...),
    storage_factory: StorageFactory = Depends(get_storage_factory),
    api_config: ApiServerConfig = Depends(get_api_config),
):
    """Validate an uploaded shapefile archive and store it in the activity's bucket.

    The archive is only stored when every shapefile in it passes validation.
    """
    rules = UploadRulesConfig()
    errors = check_upload_parameters(activity, bpdas, year, file.filename, rules)
    if errors:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid upload parameters",
                "details": [{"field": e.field, "message": e.message} for e in errors],
            },
        )

    # One byte past the limit is enough to reject oversized archives
    content = await file.read(rules.max_archive_bytes + 1)
    if len(content) > rules.max_archive_bytes:
        return JSONResponse(
            status_code=413,
            content={"error": f"Archive exceeds {rules.max_archive_bytes} bytes"},
        )

    selected = Activity(activity)
    result = await run_validation(content, selected, api_config.validation_timeout_seconds)
    if not result.valid:
        return JSONResponse(
            status_code=422,
            content={"error": "Shapefile validation failed", "report": result.report},
        )

    key = build_object_key(bpdas, year, file.filename)
    try:
        with closing(storage_factory(selected.bucket)) as storage:
            location = await run_in_threadpool(storage.upload, key, content)
    except (ClientError, StorageError, ValueError) as e:
        logger.error(f"Failed to store {key} in {selected.bucket}: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to store archive", "details": str(e)},
        )

    return {"message": "Upload succeeded", "location": location, "report": result.report}
