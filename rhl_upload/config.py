"""Configuration and constants for the RHL shapefile upload service.

This module defines the activity field schemas, the area precision rule,
and runtime configuration for storage and the HTTP API.

Includes configuration for:
- Object storage (AWSConfig with AWS_ prefix)
- WebDAV NAS storage (WebDavConfig with WEBDAV_ prefix)
- Backend selection (StorageConfig with STORAGE_ prefix)
- HTTP API server (ApiServerConfig with API_ prefix)
- Upload parameter rules (UploadRulesConfig with UPLOAD_ prefix)

Configuration can be overridden via:
1. Environment variables (e.g., STORAGE_BACKEND=webdav, UPLOAD_MAX_YEAR=2031)
2. .env file in the current directory
3. Default values in code
"""

from dataclasses import dataclass
from types import MappingProxyType

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rhl_upload.models.enums import Activity, StorageBackend


@dataclass(frozen=True)
class ShapefileConstants:
    """Fixed shapefile rules used by the archive validator.

    These are NOT configurable - existing uploaders and the downstream
    reporting rely on them verbatim.
    """

    GEOMETRY_EXTENSION: str = ".shp"
    INDEX_EXTENSION: str = ".shx"
    ATTRIBUTE_EXTENSION: str = ".dbf"

    # Optional sidecars copied next to the table so it decodes with the right encoding
    SIDECAR_EXTENSIONS: tuple[str, ...] = (".cpg", ".prj")

    AREA_FIELD: str = "LUAS_HA"
    MAX_AREA_FRACTION: float = 0.5

    @property
    def required_extensions(self) -> tuple[str, ...]:
        return (self.GEOMETRY_EXTENSION, self.INDEX_EXTENSION, self.ATTRIBUTE_EXTENSION)


# Module-level singleton for shapefile constants
CONSTANTS = ShapefileConstants()


# Required attribute-table columns per activity (case-sensitive, order preserved for reports)
ACTIVITY_SCHEMAS: MappingProxyType[Activity, tuple[str, ...]] = MappingProxyType(
    {
        Activity.VEGETATIF: (
            "BPDAS",
            "PROVINSI",
            "KABUPATEN",
            "KECAMATAN",
            "DESA",
            "TAHUN",
            "POLA",
            "FUNGSI",
            "LUAS_HA",
            "BTG_HA",
            "JML_BTG",
            "NO_KNTRK",
            "TGL_KNTRK",
            "PELAKSANA",
        ),
        Activity.UPSA: (
            "BPDAS",
            "PROVINSI",
            "KABUPATEN",
            "KECAMATAN",
            "DESA",
            "TAHUN",
            "JNS_BGN",
            "JML_UNIT",
            "LUAS_HA",
            "NO_KNTRK",
            "TGL_KNTRK",
            "PELAKSANA",
        ),
        Activity.FOLU: (
            "BPDAS",
            "PROVINSI",
            "KABUPATEN",
            "KECAMATAN",
            "DESA",
            "TAHUN",
            "SKEMA",
            "KELOMPOK",
            "LUAS_HA",
            "BTG_HA",
            "JML_BTG",
            "TGL_KNTRK",
        ),
    }
)


def required_fields(activity: Activity) -> tuple[str, ...]:
    """Return the required attribute columns for an activity."""
    return ACTIVITY_SCHEMAS[activity]


class AWSConfig(BaseSettings):
    """Object storage configuration.

    Works against AWS S3 or any S3-compatible provider via AWS_ENDPOINT_URL.
    Credentials are resolved by boto3's normal chain.
    """

    model_config = SettingsConfigDict(
        env_prefix="AWS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    region: str = Field(default="ap-southeast-1")
    endpoint_url: str | None = Field(
        default=None, description="Override endpoint for S3-compatible storage"
    )
    list_max_keys: int = Field(
        default=100, ge=1, le=1000, description="Maximum keys returned by a folder listing"
    )


class WebDavConfig(BaseSettings):
    """WebDAV NAS configuration.

    Can be overridden via environment variables with WEBDAV_ prefix:
    - WEBDAV_BASE_URL (e.g. https://nas.example.go.id/remote.php/dav/files/rhl)
    - WEBDAV_USERNAME / WEBDAV_PASSWORD
    - WEBDAV_TIMEOUT
    """

    model_config = SettingsConfigDict(
        env_prefix="WEBDAV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(default="", description="Root collection URL on the NAS")
    username: str = Field(default="")
    password: str = Field(default="")
    timeout: float = Field(default=60.0, gt=0, description="Request timeout (seconds)")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class StorageConfig(BaseSettings):
    """Selects which storage tier receives validated archives."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    backend: StorageBackend = Field(default=StorageBackend.S3)


class ApiServerConfig(BaseSettings):
    """Configuration for the HTTP API server.

    Can be overridden via environment variables with API_ prefix:
    - API_PORT (default: 3001)
    - API_CORS_ORIGINS: JSON list of allowed browser origins
    - API_VALIDATION_TIMEOUT_SECONDS: upper bound on one archive validation
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    port: int = Field(default=3001, ge=1, le=65535, description="Port for the API server")
    cors_origins: list[str] = Field(
        default=["https://uploadshp-rh.netlify.app", "http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )
    validation_timeout_seconds: float = Field(
        default=120.0, gt=0, description="Validation time limit before responding with 504"
    )


class UploadRulesConfig(BaseSettings):
    """Limits applied to upload parameters before validation."""

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    min_year: int = Field(default=2015, description="Earliest accepted activity year")
    max_year: int = Field(default=2030, description="Latest accepted activity year")
    max_archive_bytes: int = Field(
        default=200 * 1024 * 1024, gt=0, description="Largest accepted ZIP upload"
    )
