"""Attribute schema checks for one shapefile unit."""

import math
from collections.abc import Iterable, Sequence

import pandas as pd

from rhl_upload.config import CONSTANTS
from rhl_upload.models.archive import UnitReport

NOT_NUMERIC = "must be numeric"
FRACTION_TOO_LARGE = f"fractional part exceeds {CONSTANTS.MAX_AREA_FRACTION}"


def is_empty_value(value: object) -> bool:
    """True for null, NaN and blank strings (DBF pads character fields with spaces)."""
    if isinstance(value, str):
        return value.strip() == ""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def check_area_value(value: object) -> str | None:
    """Return the reason an area value is invalid, or None when it is acceptable.

    Callers only pass non-empty values; empty ones are reported as empty fields.
    """
    try:
        area = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return NOT_NUMERIC

    if not math.isfinite(area):
        return NOT_NUMERIC
    # Fractional part of the magnitude; -1.7 has fraction 0.7
    if abs(math.modf(area)[0]) > CONSTANTS.MAX_AREA_FRACTION:
        return FRACTION_TOO_LARGE
    return None


def evaluate_records(
    name: str,
    records: Iterable[dict[str, object]],
    fields: Sequence[str],
) -> UnitReport:
    """Evaluate every record of one unit against the required fields.

    Args:
        name: Unit name used in the report
        records: Attribute records in table order
        fields: Required column names for the activity

    Returns:
        UnitReport with missing fields, empty-value rows and invalid area values.
        A unit with no records only carries its record count of zero.
    """
    report = UnitReport(name=name)

    for row, record in enumerate(records, start=1):
        report.record_count = row

        for field in fields:
            if field not in record:
                report.missing_fields.add(field)
            elif is_empty_value(record[field]):
                report.empty_fields.setdefault(field, []).append(row)

        if CONSTANTS.AREA_FIELD in record and not is_empty_value(record[CONSTANTS.AREA_FIELD]):
            reason = check_area_value(record[CONSTANTS.AREA_FIELD])
            if reason is not None:
                report.invalid_area.append((row, reason))

    return report
