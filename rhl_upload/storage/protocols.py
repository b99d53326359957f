"""Storage protocol definitions."""

from typing import Protocol


class StorageError(Exception):
    """A storage backend rejected a request."""


class ShapefileStorage(Protocol):
    """Protocol for storage tiers that hold shapefile archives.

    Keys are slash-separated paths relative to the backend root
    (e.g. "shapefiles/CITARUM_CILIWUNG/2024/blok_a.zip").
    """

    def exists(self, key: str) -> bool:
        """Return True if an object is stored under ``key``."""
        ...

    def download(self, key: str) -> bytes:
        """Return the bytes stored under ``key``."""
        ...

    def upload(self, key: str, data: bytes) -> str:
        """Store ``data`` under ``key`` and return its location."""
        ...

    def close(self) -> None:
        """Release any connections held by the backend."""
        ...
