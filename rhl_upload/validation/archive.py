"""In-memory ZIP handling and shapefile unit discovery."""

import io
import zipfile
from pathlib import PurePosixPath

from rhl_upload.config import CONSTANTS
from rhl_upload.models.archive import ShapefileUnit
from rhl_upload.validation.errors import MalformedArchiveError, NoGeometryFoundError


def open_archive(archive_bytes: bytes) -> zipfile.ZipFile:
    """Open raw upload bytes as a read-only ZIP archive.

    Args:
        archive_bytes: Uploaded bytes (never written to disk)

    Returns:
        ZipFile over an in-memory buffer

    Raises:
        MalformedArchiveError: If the bytes are not a readable ZIP
    """
    try:
        return zipfile.ZipFile(io.BytesIO(archive_bytes), "r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
        raise MalformedArchiveError(f"Cannot open archive: {e}") from e


def _is_ignored(entry_name: str) -> bool:
    # Directories and macOS resource forks
    path = PurePosixPath(entry_name)
    return (
        entry_name.endswith("/")
        or "__MACOSX" in path.parts
        or path.name.startswith("._")
    )


def _split_extension(entry_name: str) -> tuple[str, str]:
    """Split an entry into (base name, lower-cased extension)."""
    dot = entry_name.rfind(".")
    if dot <= entry_name.rfind("/"):
        return entry_name, ""
    return entry_name[:dot], entry_name[dot:].lower()


def discover_units(archive: zipfile.ZipFile) -> list[ShapefileUnit]:
    """Group archive entries into shapefile units, one per .shp entry.

    Siblings are matched on the full entry path without extension,
    case-insensitively. Units are returned in archive order of their .shp entry.

    Raises:
        NoGeometryFoundError: If the archive holds no .shp entry
    """
    entries: dict[tuple[str, str], str] = {}
    geometry_entries: list[tuple[str, str]] = []

    for entry_name in archive.namelist():
        if _is_ignored(entry_name):
            continue
        base, ext = _split_extension(entry_name)
        key = (base.lower(), ext)
        # First occurrence wins when an archive repeats a name
        entries.setdefault(key, entry_name)
        if ext == CONSTANTS.GEOMETRY_EXTENSION:
            geometry_entries.append((base, entry_name))

    if not geometry_entries:
        msg = "archive must contain at least one geometry file (.shp)"
        raise NoGeometryFoundError(msg)

    units = []
    for base, entry_name in geometry_entries:
        lookup = base.lower()
        sidecars = tuple(
            entries[(lookup, ext)]
            for ext in CONSTANTS.SIDECAR_EXTENSIONS
            if (lookup, ext) in entries
        )
        units.append(
            ShapefileUnit(
                name=base,
                geometry_entry=entry_name,
                index_entry=entries.get((lookup, CONSTANTS.INDEX_EXTENSION)),
                attribute_entry=entries.get((lookup, CONSTANTS.ATTRIBUTE_EXTENSION)),
                sidecar_entries=sidecars,
            )
        )
    return units
