"""Storage backends for validated shapefile archives.

- S3Storage: S3 or S3-compatible object storage (one bucket per activity)
- WebDavStorage: WebDAV NAS, one top-level collection per activity
"""

from rhl_upload.config import AWSConfig, StorageConfig, WebDavConfig
from rhl_upload.models.enums import StorageBackend
from rhl_upload.storage.protocols import ShapefileStorage, StorageError
from rhl_upload.storage.s3 import S3Storage
from rhl_upload.storage.webdav import WebDavStorage


def create_storage(bucket: str, backend: StorageBackend | None = None) -> ShapefileStorage:
    """Create the configured storage backend for ``bucket``.

    Args:
        bucket: Activity bucket name (e.g. "rhlvegetatif")
        backend: Override for STORAGE_BACKEND

    Returns:
        S3Storage or WebDavStorage
    """
    backend = backend or StorageConfig().backend
    if backend == StorageBackend.WEBDAV:
        return WebDavStorage(bucket, WebDavConfig())

    aws_config = AWSConfig()
    return S3Storage(
        bucket_name=bucket,
        region=aws_config.region,
        endpoint_url=aws_config.endpoint_url,
        max_keys=aws_config.list_max_keys,
    )


__all__ = [
    "S3Storage",
    "ShapefileStorage",
    "StorageError",
    "WebDavStorage",
    "create_storage",
]
