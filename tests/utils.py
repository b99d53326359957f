import io
import zipfile
from pathlib import Path

import geopandas as gpd
import pandas as pd
from shapely.geometry import Point

from rhl_upload.config import ACTIVITY_SCHEMAS
from rhl_upload.models.enums import Activity

SHAPEFILE_EXTENSIONS = (".shp", ".shx", ".dbf", ".prj", ".cpg")


def valid_record(activity: Activity = Activity.VEGETATIF, **overrides) -> dict[str, str]:
    """Build one attribute record satisfying every required field of ``activity``."""
    record = {field: f"{field.lower()}_value" for field in ACTIVITY_SCHEMAS[activity]}
    record["LUAS_HA"] = "12.40"
    record.update(overrides)
    return record


def write_shapefile(directory: Path, name: str, records: list[dict]) -> dict[str, bytes]:
    """Write ``records`` as a point shapefile and return its component files.

    Args:
        directory: Scratch directory for the shapefile
        name: Base name of the shapefile
        records: Attribute records, one point feature each

    Returns:
        Mapping of component file name (e.g. "blok_a.dbf") to bytes
    """
    gdf = gpd.GeoDataFrame(
        records,
        geometry=[Point(106.8 + i * 0.001, -6.2) for i in range(len(records))],
        crs="EPSG:4326",
    )
    gdf.to_file(directory / f"{name}.shp")
    return _component_files(directory, name)


def write_empty_shapefile(directory: Path, name: str, fields: list[str]) -> dict[str, bytes]:
    """Write a point shapefile whose attribute table has ``fields`` but no rows."""
    gdf = gpd.GeoDataFrame(
        {field: pd.Series([], dtype="object") for field in fields},
        geometry=[],
        crs="EPSG:4326",
    )
    # No features to infer the geometry type from
    gdf.to_file(directory / f"{name}.shp", engine="pyogrio", geometry_type="Point")
    return _component_files(directory, name)


def _component_files(directory: Path, name: str) -> dict[str, bytes]:
    return {
        f"{name}{ext}": (directory / f"{name}{ext}").read_bytes()
        for ext in SHAPEFILE_EXTENSIONS
        if (directory / f"{name}{ext}").exists()
    }


def build_zip(entries: dict[str, bytes]) -> bytes:
    """Zip ``entries`` (archive name -> content) in memory, preserving insertion order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zipf:
        for name, content in entries.items():
            zipf.writestr(name, content)
    return buffer.getvalue()
