"""Shapefile archive validator.

Checks every shapefile in an uploaded ZIP against the required attribute
fields of one activity and collects every defect, so a single submission
surfaces everything that needs fixing.
"""

from rhl_upload.config import required_fields
from rhl_upload.models.archive import ShapefileUnit, UnitReport, ValidationResult
from rhl_upload.models.enums import Activity
from rhl_upload.validation.archive import discover_units, open_archive
from rhl_upload.validation.attributes import iter_attribute_records
from rhl_upload.validation.errors import UnknownActivityError
from rhl_upload.validation.report import render_report
from rhl_upload.validation.schema import evaluate_records


class ArchiveValidator:
    """Validates shapefile archives for one activity.

    Checks:
    - Archive opens as a ZIP
    - At least one .shp entry exists
    - Every .shp has .shx and .dbf siblings (matched case-insensitively)
    - Every attribute table has at least one record
    - Required fields are present and non-empty in every record
    - LUAS_HA is numeric with a fractional part of at most 0.5

    A table that cannot be decoded is reported against its own shapefile;
    the remaining shapefiles are still checked.
    """

    def __init__(self, activity: Activity | str):
        try:
            self.activity = Activity(activity)
        except ValueError as e:
            valid = ", ".join(a.value for a in Activity)
            msg = f"Unknown activity {activity!r}. Expected one of: {valid}"
            raise UnknownActivityError(msg) from e
        self.fields = required_fields(self.activity)

    def validate(self, archive_bytes: bytes) -> ValidationResult:
        """Validate an archive.

        Args:
            archive_bytes: Raw ZIP bytes

        Returns:
            ValidationResult; ``valid`` is True only if every shapefile is valid

        Raises:
            MalformedArchiveError: If the bytes are not a ZIP
            NoGeometryFoundError: If the archive holds no .shp entry
        """
        with open_archive(archive_bytes) as archive:
            units = [self._validate_unit(archive, unit) for unit in discover_units(archive)]

        valid = all(unit.is_valid for unit in units)
        return ValidationResult(
            valid=valid,
            units=units,
            report=render_report(units, self.fields, self.activity.value),
        )

    def _validate_unit(self, archive, unit: ShapefileUnit) -> UnitReport:
        if not unit.is_complete:
            return UnitReport(name=unit.name, missing_siblings=unit.missing_extensions)

        try:
            report = evaluate_records(
                unit.name, iter_attribute_records(archive, unit), self.fields
            )
        except Exception as e:
            return UnitReport(name=unit.name, decode_error=str(e) or type(e).__name__)

        if report.record_count == 0:
            # Schema rules are not evaluated for an empty table
            return UnitReport(name=unit.name)
        return report


def validate(archive_bytes: bytes, activity: Activity | str) -> ValidationResult:
    """Validate ``archive_bytes`` against the field schema of ``activity``.

    Raises:
        UnknownActivityError: If ``activity`` is not a known label
        MalformedArchiveError: If the bytes are not a ZIP
        NoGeometryFoundError: If the archive holds no .shp entry
    """
    return ArchiveValidator(activity).validate(archive_bytes)
