"""Enumerations shared across the validator, storage and API layers."""

from enum import StrEnum


class Activity(StrEnum):
    """RHL programme activities, each with its own required attribute fields.

    The value doubles as the bucket suffix (bucket ``rhl<value>``).
    """

    VEGETATIF = "vegetatif"  # Vegetative rehabilitation
    UPSA = "upsa"  # Soil and water conservation works
    FOLU = "folu"  # Forest and other land use

    @property
    def bucket(self) -> str:
        return f"rhl{self.value}"

    @classmethod
    def from_bucket(cls, bucket: str) -> "Activity":
        """Resolve the activity whose storage bucket is ``bucket``.

        Raises:
            ValueError: If no activity owns the bucket
        """
        for activity in cls:
            if activity.bucket == bucket:
                return activity
        msg = f"No activity is stored in bucket {bucket!r}"
        raise ValueError(msg)


class StorageBackend(StrEnum):
    """Remote storage tiers that accept validated archives."""

    S3 = "s3"
    WEBDAV = "webdav"


class ErrorKind(StrEnum):
    """Defect and failure categories reported by the archive validator.

    MALFORMED_ARCHIVE, NO_GEOMETRY_FOUND and UNKNOWN_ACTIVITY abort validation.
    TIMEOUT is raised by hosts that bound validation time. The remaining kinds
    are collected per shapefile in the report.
    """

    MALFORMED_ARCHIVE = "MalformedArchive"
    NO_GEOMETRY_FOUND = "NoGeometryFound"
    INCOMPLETE_UNIT = "IncompleteUnit"
    EMPTY_UNIT = "EmptyUnit"
    SCHEMA_VIOLATION = "SchemaViolation"
    INVALID_AREA_VALUE = "InvalidAreaValue"
    DECODE_ERROR = "DecodeError"
    UNKNOWN_ACTIVITY = "UnknownActivity"
    TIMEOUT = "Timeout"
