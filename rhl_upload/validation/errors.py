"""Validation error definitions."""

from dataclasses import dataclass

from rhl_upload.models.enums import ErrorKind


@dataclass
class ValidationError:
    """Represents a parameter validation error with descriptive message."""

    message: str
    field: str | None = None


class ArchiveValidationError(Exception):
    """Base class for failures that abort archive validation.

    No partial report is produced when one of these is raised.
    """

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedArchiveError(ArchiveValidationError):
    """The uploaded bytes could not be opened as a ZIP archive."""

    kind = ErrorKind.MALFORMED_ARCHIVE


class NoGeometryFoundError(ArchiveValidationError):
    """The archive holds no .shp entry."""

    kind = ErrorKind.NO_GEOMETRY_FOUND


class UnknownActivityError(ArchiveValidationError):
    """The caller asked for an activity with no field schema."""

    kind = ErrorKind.UNKNOWN_ACTIVITY


class ValidationTimeoutError(ArchiveValidationError):
    """Validation exceeded the host's time limit; partial results are discarded."""

    kind = ErrorKind.TIMEOUT
