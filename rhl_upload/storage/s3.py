"""S3 operations for shapefile archives."""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from rhl_upload.storage.protocols import StorageError

logger = logging.getLogger(__name__)


class S3Storage:
    """Handles S3 operations for one activity bucket.

    Service errors (``ClientError``) are logged and re-raised. Connection and
    credential failures (``BotoCoreError``) are raised as ``StorageError``.
    """

    def __init__(
        self,
        bucket_name: str,
        region: str,
        endpoint_url: str | None = None,
        max_keys: int = 100,
    ):
        self.bucket_name = bucket_name
        self.region = region
        self.max_keys = max_keys
        client_kwargs: dict = {"region_name": region}
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        self.s3 = boto3.client("s3", **client_kwargs)

    def __enter__(self) -> "S3Storage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.s3.close()

    def _transport_error(self, action: str, e: BotoCoreError) -> StorageError:
        msg = f"Failed to {action} s3://{self.bucket_name}: {e}"
        logger.error(msg)
        return StorageError(msg)

    def list_shapefiles(self, folder: str = "shapefiles") -> list[str]:
        """List file names directly under ``folder``.

        Args:
            folder: Folder inside the bucket (no trailing slash, "" for the root)

        Returns:
            Names relative to the folder, at most ``max_keys`` of them

        Raises:
            ClientError: If the listing is rejected
            StorageError: If S3 cannot be reached
        """
        prefix = f"{folder}/" if folder else ""
        try:
            response = self.s3.list_objects_v2(
                Bucket=self.bucket_name,
                Prefix=prefix,
                Delimiter="/",
                MaxKeys=self.max_keys,
            )
        except ClientError as e:
            logger.error(f"Failed to list s3://{self.bucket_name}/{prefix}: {e}")
            raise
        except BotoCoreError as e:
            raise self._transport_error("list", e) from e

        names = [obj["Key"][len(prefix) :] for obj in response.get("Contents", [])]
        names.extend(
            p["Prefix"][len(prefix) :].rstrip("/") for p in response.get("CommonPrefixes", [])
        )
        return [name for name in names if name]

    def exists(self, key: str) -> bool:
        try:
            self.s3.head_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            logger.error(f"Failed to check s3://{self.bucket_name}/{key}: {e}")
            raise
        except BotoCoreError as e:
            raise self._transport_error("check", e) from e
        return True

    def download(self, key: str) -> bytes:
        logger.info(f"Downloading shapefile ZIP from s3://{self.bucket_name}/{key}")
        try:
            response = self.s3.get_object(Bucket=self.bucket_name, Key=key)
            return response["Body"].read()
        except ClientError as e:
            logger.error(f"Failed to download from S3: {e}")
            raise
        except BotoCoreError as e:
            raise self._transport_error("download from", e) from e

    def upload(self, key: str, data: bytes) -> str:
        try:
            self.s3.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                ContentType="application/zip",
            )
        except ClientError as e:
            logger.error(f"Failed to upload to S3: {e}")
            raise
        except BotoCoreError as e:
            raise self._transport_error("upload to", e) from e

        location = f"s3://{self.bucket_name}/{key}"
        logger.info(f"Uploaded shapefile archive to {location}")
        return location
