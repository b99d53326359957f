"""Shared fixtures for building shapefile archives."""

import pytest

from tests.utils import build_zip, valid_record, write_shapefile


@pytest.fixture
def shapefile_factory(tmp_path):
    """Return a function that writes a shapefile and returns its component bytes."""
    counter = {"n": 0}

    def _make(name: str, records: list[dict]) -> dict[str, bytes]:
        counter["n"] += 1
        directory = tmp_path / f"shp_{counter['n']}"
        directory.mkdir()
        return write_shapefile(directory, name, records)

    return _make


@pytest.fixture
def valid_archive(shapefile_factory) -> bytes:
    """Archive with one complete, valid vegetatif shapefile of two records."""
    files = shapefile_factory("blok_a", [valid_record(), valid_record(LUAS_HA="3.5")])
    return build_zip(files)
