"""Human-readable rendering of archive validation results."""

from collections.abc import Sequence

from rhl_upload.config import CONSTANTS
from rhl_upload.models.archive import UnitReport

RESUBMIT_LINE = "Please fix the errors above and upload the archive again."


def _ordered(names, fields: Sequence[str]) -> list[str]:
    # Required-field order first, anything unexpected after it alphabetically
    position = {field: index for index, field in enumerate(fields)}
    return sorted(names, key=lambda name: (position.get(name, len(position)), name))


def _format_rows(rows: list[int]) -> str:
    label = "row" if len(rows) == 1 else "rows"
    return f"{label} {', '.join(str(row) for row in rows)}"


def render_unit(unit: UnitReport, fields: Sequence[str]) -> list[str]:
    """Render one unit as report lines: a header plus non-empty sections."""
    if unit.is_valid:
        return [f"Shapefile '{unit.name}' is valid ({unit.record_count} records)."]

    lines = [f"Shapefile '{unit.name}' has errors:"]

    if unit.missing_siblings:
        required = ", ".join(CONSTANTS.required_extensions)
        lines.append(
            f"  Missing companion files: {', '.join(unit.missing_siblings)} "
            f"(each shapefile requires {required})"
        )
    if unit.decode_error is not None:
        lines.append(f"  Could not read attribute table: {unit.decode_error}")
    if unit.is_empty:
        lines.append("  No data: the attribute table has no records")
    if unit.missing_fields:
        lines.append(f"  Missing fields: {', '.join(_ordered(unit.missing_fields, fields))}")
    if unit.empty_fields:
        lines.append("  Empty fields:")
        for field in _ordered(unit.empty_fields, fields):
            lines.append(f"    - {field}: {_format_rows(unit.empty_fields[field])}")
    if unit.invalid_area:
        lines.append(f"  Invalid {CONSTANTS.AREA_FIELD} values:")
        for row, reason in unit.invalid_area:
            lines.append(f"    - row {row}: {reason}")

    return lines


def render_report(units: Sequence[UnitReport], fields: Sequence[str], activity: str) -> str:
    """Render the full archive report.

    Every unit appears in discovery order. When all units are valid a short
    confirmation is returned instead.
    """
    if units and all(unit.is_valid for unit in units):
        return (
            f"All {len(units)} shapefile(s) passed validation for activity '{activity}'."
        )

    blocks = ["\n".join(render_unit(unit, fields)) for unit in units]
    blocks.append(RESUBMIT_LINE)
    return "\n\n".join(blocks)
