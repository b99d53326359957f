"""Attribute table decoding for shapefile units.

The archive stays in memory; only the entries belonging to one unit are
written to a scratch directory so GDAL can open the table. Geometry is never
parsed.
"""

import tempfile
import zipfile
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

import geopandas as gpd

from rhl_upload.models.archive import ShapefileUnit

AttributeRecord = dict[str, object]


def _unit_entries(unit: ShapefileUnit) -> list[str]:
    entries = [unit.geometry_entry, unit.index_entry, unit.attribute_entry]
    return [entry for entry in (*entries, *unit.sidecar_entries) if entry is not None]


def read_attribute_table(archive: zipfile.ZipFile, unit: ShapefileUnit):
    """Decode a complete unit's attribute table into a DataFrame.

    Args:
        archive: Open archive containing the unit
        unit: A complete shapefile unit (.shp, .shx and .dbf present)

    Returns:
        pandas DataFrame with one row per record, in file order, and one column
        per table field. No geometry column.

    Raises:
        ValueError: If the unit is missing its index or attribute entry
        Exception: Any decoder error from GDAL for a corrupt table
    """
    if not unit.is_complete:
        msg = f"Shapefile {unit.name} is incomplete: missing {', '.join(unit.missing_extensions)}"
        raise ValueError(msg)

    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)
        # Flatten to a fixed stem so nested or oddly-cased names open cleanly
        for entry in _unit_entries(unit):
            ext = PurePosixPath(entry).suffix.lower()
            (tmpdir_path / f"unit{ext}").write_bytes(archive.read(entry))

        return gpd.read_file(tmpdir_path / "unit.shp", ignore_geometry=True)


def iter_attribute_records(
    archive: zipfile.ZipFile, unit: ShapefileUnit
) -> Iterator[AttributeRecord]:
    """Yield one attribute record per table row, in file order.

    Each record maps every column defined by the table to its value, so a
    column absent from the table is absent from the record while a present
    column with no value maps to None/NaN/"".
    """
    table = read_attribute_table(archive, unit)
    columns = [str(column) for column in table.columns]
    for values in table.itertuples(index=False, name=None):
        yield dict(zip(columns, values, strict=True))
