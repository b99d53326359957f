"""Validation module for uploaded shapefile archives and upload parameters.

This module provides:
1. Archive validation - Checks every shapefile in a ZIP against the required
   attribute fields of an activity and reports every defect found
2. Upload parameter validation - Checks bucket, object path, BPDAS code and year
"""

from rhl_upload.validation.errors import (
    ArchiveValidationError,
    MalformedArchiveError,
    NoGeometryFoundError,
    UnknownActivityError,
    ValidationError,
    ValidationTimeoutError,
)
from rhl_upload.validation.upload_path import (
    build_object_key,
    check_upload_parameters,
    check_upload_target,
)
from rhl_upload.validation.validator import ArchiveValidator, validate

__all__ = [
    "ArchiveValidationError",
    "ArchiveValidator",
    "MalformedArchiveError",
    "NoGeometryFoundError",
    "UnknownActivityError",
    "ValidationError",
    "ValidationTimeoutError",
    "build_object_key",
    "check_upload_parameters",
    "check_upload_target",
    "validate",
]
