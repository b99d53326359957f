"""WebDAV operations for storing shapefile archives on the NAS."""

import logging

import httpx

from rhl_upload.config import WebDavConfig
from rhl_upload.storage.protocols import StorageError

logger = logging.getLogger(__name__)


class WebDavStorage:
    """Stores archives under ``<base_url>/<bucket>/`` on a WebDAV server.

    The activity bucket becomes the top-level collection so the NAS mirrors
    the object-storage layout. The underlying HTTP client is released by
    ``close()`` or by using the storage as a context manager.
    """

    def __init__(self, bucket_name: str, config: WebDavConfig, client: httpx.Client | None = None):
        if not config.base_url:
            msg = "WEBDAV_BASE_URL must be set to use the WebDAV backend"
            raise ValueError(msg)
        self.bucket_name = bucket_name
        self.root = f"{config.base_url}/{bucket_name}"
        auth = (config.username, config.password) if config.username else None
        self.client = client or httpx.Client(auth=auth, timeout=config.timeout)

    def __enter__(self) -> "WebDavStorage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def _url(self, key: str) -> str:
        return f"{self.root}/{key.strip('/')}"

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send one request, turning transport failures into StorageError."""
        try:
            return self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            msg = f"{method} {url} failed: {e}"
            logger.error(msg)
            raise StorageError(msg) from e

    def ensure_collections(self, key: str) -> None:
        """Create every missing collection on the path to ``key``.

        MKCOL answers 405 when the collection already exists.
        """
        parts = key.strip("/").split("/")[:-1]
        url = self.root
        for part in ["", *parts]:
            url = f"{url}/{part}" if part else url
            response = self._request("MKCOL", url)
            if response.status_code not in (201, 405):
                msg = f"MKCOL {url} failed with HTTP {response.status_code}"
                logger.error(msg)
                raise StorageError(msg)

    def exists(self, key: str) -> bool:
        response = self._request("HEAD", self._url(key))
        if response.status_code == 404:
            return False
        if response.is_success:
            return True
        msg = f"HEAD {self._url(key)} failed with HTTP {response.status_code}"
        raise StorageError(msg)

    def download(self, key: str) -> bytes:
        response = self._request("GET", self._url(key))
        if not response.is_success:
            msg = f"GET {self._url(key)} failed with HTTP {response.status_code}"
            logger.error(msg)
            raise StorageError(msg)
        return response.content

    def upload(self, key: str, data: bytes) -> str:
        self.ensure_collections(key)
        url = self._url(key)
        response = self._request(
            "PUT", url, content=data, headers={"Content-Type": "application/zip"}
        )
        if not response.is_success:
            msg = f"PUT {url} failed with HTTP {response.status_code}"
            logger.error(msg)
            raise StorageError(msg)

        logger.info(f"Uploaded shapefile archive to {url}")
        return url
