"""Entry point for the shapefile upload API server."""

import logging
import sys

import uvicorn

from rhl_upload.common.log_utils import configure_logging
from rhl_upload.config import ApiServerConfig, StorageConfig

configure_logging()
logger = logging.getLogger(__name__)


def main():
    """Start the API server on the configured port."""
    try:
        api_config = ApiServerConfig()
        storage_config = StorageConfig()

        from rhl_upload.api import app

        logger.info(
            f"Server starting on port {api_config.port} "
            f"(storage backend: {storage_config.backend.value})"
        )
        uvicorn.run(app, host="0.0.0.0", port=api_config.port, log_config=None)

    except Exception as e:
        logger.exception(f"Server failed to start: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
