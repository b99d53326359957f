"""Upload target and parameter checks.

These run before an archive is fetched or validated, and collect every
problem with the request parameters as ValidationError entries.
"""

import re
from pathlib import PurePosixPath

from rhl_upload.config import UploadRulesConfig
from rhl_upload.models.enums import Activity
from rhl_upload.validation.errors import ValidationError

SHAPEFILE_FOLDER = "shapefiles"
ZIP_PATH_PATTERN = re.compile(r"^shapefiles/[\w\-. ]+\.zip$", re.IGNORECASE)
BPDAS_PATTERN = re.compile(r"^[A-Z0-9_]{2,40}$")
FILENAME_PATTERN = re.compile(r"^[\w\-. ]+\.zip$", re.IGNORECASE)


def valid_buckets() -> list[str]:
    return [activity.bucket for activity in Activity]


def check_upload_target(bucket: str | None, zip_path: str | None) -> list[ValidationError]:
    """Validate the bucket and object path of an archive already in storage.

    Returns:
        List of validation errors (empty if valid)
    """
    if not zip_path or not bucket:
        return [ValidationError(message="zip_path and bucket are required", field="body")]

    errors = []
    if bucket not in valid_buckets():
        errors.append(
            ValidationError(
                message=f"Invalid bucket. Must be one of: {', '.join(valid_buckets())}.",
                field="bucket",
            )
        )
    if not ZIP_PATH_PATTERN.match(zip_path):
        errors.append(
            ValidationError(
                message="zip_path must have the form shapefiles/<file_name>.zip",
                field="zip_path",
            )
        )
    return errors


def check_upload_parameters(
    activity: str,
    bpdas: str,
    year: int,
    filename: str | None,
    rules: UploadRulesConfig | None = None,
) -> list[ValidationError]:
    """Validate the parameters of a new upload.

    Args:
        activity: Activity label
        bpdas: River-basin management office (BPDAS) code, e.g. "CITARUM_CILIWUNG"
        year: Activity year
        filename: Original upload filename
        rules: Year range and limits (defaults from environment)

    Returns:
        List of validation errors (empty if valid)
    """
    rules = rules or UploadRulesConfig()
    errors = []

    if activity not in {a.value for a in Activity}:
        errors.append(
            ValidationError(
                message=f"Invalid activity. Must be one of: {', '.join(a.value for a in Activity)}.",
                field="activity",
            )
        )
    if not BPDAS_PATTERN.match(bpdas or ""):
        errors.append(
            ValidationError(
                message="BPDAS code must be 2-40 upper-case letters, digits or underscores",
                field="bpdas",
            )
        )
    if not rules.min_year <= year <= rules.max_year:
        errors.append(
            ValidationError(
                message=f"Year must be between {rules.min_year} and {rules.max_year}",
                field="year",
            )
        )
    if not filename or not FILENAME_PATTERN.match(PurePosixPath(filename).name):
        errors.append(
            ValidationError(message="Upload must be a .zip file", field="file")
        )
    return errors


def build_object_key(bpdas: str, year: int, filename: str) -> str:
    """Build the storage key for a validated archive."""
    return f"{SHAPEFILE_FOLDER}/{bpdas}/{year}/{PurePosixPath(filename).name}"
