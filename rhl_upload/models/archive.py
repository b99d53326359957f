"""Shapefile archive structures and validation results.

These are plain dataclasses built per request from the uploaded bytes and
discarded once the response is produced. Report text is rendered separately
(see rhl_upload.validation.report) so the structured result can be inspected
on its own.
"""

from dataclasses import dataclass, field

from rhl_upload.models.enums import ErrorKind


@dataclass(frozen=True)
class ShapefileUnit:
    """One logical shapefile inside an archive.

    Attributes:
        name: Entry path without extension, original casing (used in messages)
        geometry_entry: Archive entry name of the .shp file
        index_entry: Archive entry name of the .shx file, None if absent
        attribute_entry: Archive entry name of the .dbf file, None if absent
        sidecar_entries: Optional entries (.cpg, .prj) sharing the base name
    """

    name: str
    geometry_entry: str
    index_entry: str | None = None
    attribute_entry: str | None = None
    sidecar_entries: tuple[str, ...] = ()

    @property
    def missing_extensions(self) -> list[str]:
        missing = []
        if self.index_entry is None:
            missing.append(".shx")
        if self.attribute_entry is None:
            missing.append(".dbf")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_extensions


@dataclass
class UnitReport:
    """Defects collected for one shapefile unit.

    Row indices are 1-based and follow attribute-table order.
    """

    name: str
    missing_siblings: list[str] = field(default_factory=list)
    decode_error: str | None = None
    record_count: int = 0
    missing_fields: set[str] = field(default_factory=set)
    empty_fields: dict[str, list[int]] = field(default_factory=dict)
    invalid_area: list[tuple[int, str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the table was read but held no records."""
        return not self.missing_siblings and self.decode_error is None and self.record_count == 0

    @property
    def is_valid(self) -> bool:
        return not self.defect_kinds()

    def defect_kinds(self) -> list[ErrorKind]:
        kinds = []
        if self.missing_siblings:
            kinds.append(ErrorKind.INCOMPLETE_UNIT)
        if self.decode_error is not None:
            kinds.append(ErrorKind.DECODE_ERROR)
        if self.is_empty:
            kinds.append(ErrorKind.EMPTY_UNIT)
        if self.missing_fields or self.empty_fields:
            kinds.append(ErrorKind.SCHEMA_VIOLATION)
        if self.invalid_area:
            kinds.append(ErrorKind.INVALID_AREA_VALUE)
        return kinds


@dataclass
class ValidationResult:
    """Archive-level outcome.

    Attributes:
        valid: True only if every discovered shapefile is valid
        units: Per-shapefile reports in discovery order
        report: Human-readable report (confirmation or full defect listing)
    """

    valid: bool
    units: list[UnitReport]
    report: str
