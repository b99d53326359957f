"""Domain models for shapefile archive validation."""

from rhl_upload.models.archive import ShapefileUnit, UnitReport, ValidationResult
from rhl_upload.models.enums import Activity, ErrorKind, StorageBackend

__all__ = [
    "Activity",
    "ErrorKind",
    "StorageBackend",
    "ShapefileUnit",
    "UnitReport",
    "ValidationResult",
]
