"""Unit tests for the HTTP API routes."""

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from rhl_upload.api import app
from rhl_upload.api import dependencies
from rhl_upload.api.dependencies import get_api_config, get_storage_factory
from rhl_upload.config import ApiServerConfig, WebDavConfig
from rhl_upload.storage import StorageError, WebDavStorage
from tests.utils import build_zip, valid_record

client = TestClient(app)


class FakeStorage:
    """In-memory stand-in for a storage backend."""

    def __init__(self, objects: dict[str, bytes] | None = None, fail: bool = False):
        self.objects = dict(objects or {})
        self.fail = fail
        self.closed = False

    def exists(self, key):
        return key in self.objects

    def download(self, key):
        return self.objects[key]

    def upload(self, key, data):
        if self.fail:
            raise StorageError("PUT failed with HTTP 507")
        self.objects[key] = data
        return f"memory://{key}"

    def close(self):
        self.closed = True


@pytest.fixture
def storage():
    fake = FakeStorage()
    app.dependency_overrides[get_storage_factory] = lambda: (lambda bucket: fake)
    yield fake
    app.dependency_overrides = {}


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "OK"
    assert "timestamp" in response.json()


def test_trace_id_echoed():
    response = client.get("/health", headers={"x-request-id": "abc123"})

    assert response.headers["x-request-id"] == "abc123"


def test_validate_shapefile_missing_parameters(storage):
    response = client.post("/validate-shapefile", json={"bucket": "rhlupsa"})

    assert response.status_code == 400
    assert response.json() == {"error": "zip_path and bucket are required"}


def test_validate_shapefile_invalid_bucket(storage):
    response = client.post(
        "/validate-shapefile", json={"zip_path": "shapefiles/a.zip", "bucket": "rhlsipil"}
    )

    assert response.status_code == 400
    assert "Invalid bucket" in response.json()["error"]


def test_validate_shapefile_not_found(storage):
    response = client.post(
        "/validate-shapefile", json={"zip_path": "shapefiles/a.zip", "bucket": "rhlupsa"}
    )

    assert response.status_code == 404
    assert response.json() == {
        "error": "File a.zip not found in rhlupsa/shapefiles",
        "rootContents": [],
    }


def test_validate_shapefile_valid(storage, valid_archive):
    storage.objects["shapefiles/blok_a.zip"] = valid_archive

    response = client.post(
        "/validate-shapefile",
        json={"zip_path": "shapefiles/blok_a.zip", "bucket": "rhlvegetatif"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Validation succeeded"
    assert body["fileName"] == "blok_a.zip"
    assert body["bucket"] == "rhlvegetatif"
    assert "passed validation" in body["report"]


def test_validate_shapefile_uses_bucket_activity(storage, valid_archive):
    """A vegetatif archive fails the upsa field schema."""
    storage.objects["shapefiles/blok_a.zip"] = valid_archive

    response = client.post(
        "/validate-shapefile", json={"zip_path": "shapefiles/blok_a.zip", "bucket": "rhlupsa"}
    )

    assert response.status_code == 422
    assert "Missing fields: JNS_BGN, JML_UNIT" in response.json()["report"]


def test_validate_shapefile_malformed_archive(storage):
    storage.objects["shapefiles/a.zip"] = b"not a zip"

    response = client.post(
        "/validate-shapefile", json={"zip_path": "shapefiles/a.zip", "bucket": "rhlfolu"}
    )

    assert response.status_code == 400
    assert response.json()["error_kind"] == "MalformedArchive"


def test_validate_shapefile_storage_failure():
    def broken_factory(bucket):
        raise StorageError("HEAD failed with HTTP 500")

    app.dependency_overrides[get_storage_factory] = lambda: broken_factory
    try:
        response = client.post(
            "/validate-shapefile", json={"zip_path": "shapefiles/a.zip", "bucket": "rhlfolu"}
        )
    finally:
        app.dependency_overrides = {}

    assert response.status_code == 500
    assert response.json()["details"] == "HEAD failed with HTTP 500"


def test_validate_shapefile_unreachable_storage():
    """A WebDAV server that cannot be reached answers 500 with JSON details."""

    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    def unreachable_factory(bucket):
        http_client = httpx.Client(transport=httpx.MockTransport(refuse))
        config = WebDavConfig(base_url="https://nas.example.org/dav")
        return WebDavStorage(bucket, config, client=http_client)

    app.dependency_overrides[get_storage_factory] = lambda: unreachable_factory
    try:
        response = client.post(
            "/validate-shapefile", json={"zip_path": "shapefiles/a.zip", "bucket": "rhlfolu"}
        )
    finally:
        app.dependency_overrides = {}

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to access storage"
    assert "connection refused" in response.json()["details"]


def _upload(archive: bytes, **form):
    data = {"activity": "vegetatif", "bpdas": "CITARUM_CILIWUNG", "year": "2024", **form}
    return client.post(
        "/upload", data=data, files={"file": ("blok_a.zip", archive, "application/zip")}
    )


def test_upload_stores_valid_archive(storage, valid_archive):
    response = _upload(valid_archive)

    assert response.status_code == 201
    key = "shapefiles/CITARUM_CILIWUNG/2024/blok_a.zip"
    assert response.json()["location"] == f"memory://{key}"
    assert storage.objects[key] == valid_archive
    assert storage.closed


def test_upload_rejects_invalid_archive(storage, shapefile_factory):
    """Invalid archives are never stored; the report is returned."""
    files = shapefile_factory("blok_a", [valid_record(LUAS_HA="1.9")])

    response = _upload(build_zip(files))

    assert response.status_code == 422
    assert "row 1: fractional part exceeds 0.5" in response.json()["report"]
    assert storage.objects == {}


def test_upload_rejects_bad_parameters(storage, valid_archive):
    response = _upload(valid_archive, activity="reboisasi", year="1999")

    assert response.status_code == 400
    fields = [d["field"] for d in response.json()["details"]]
    assert fields == ["activity", "year"]


def test_upload_rejects_oversized_archive(storage, valid_archive, monkeypatch):
    monkeypatch.setenv("UPLOAD_MAX_ARCHIVE_BYTES", "10")

    response = _upload(valid_archive)

    assert response.status_code == 413
    assert response.json() == {"error": "Archive exceeds 10 bytes"}
    assert storage.objects == {}


def test_upload_without_geometry(storage):
    response = _upload(build_zip({"blok_a.dbf": b"x"}))

    assert response.status_code == 400
    assert response.json()["error_kind"] == "NoGeometryFound"


def test_upload_storage_failure(valid_archive):
    app.dependency_overrides[get_storage_factory] = lambda: (lambda bucket: FakeStorage(fail=True))
    try:
        response = _upload(valid_archive)
    finally:
        app.dependency_overrides = {}

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to store archive"


def test_validation_timeout(storage, valid_archive, mocker):
    """Validation that outlives the time limit answers 504."""

    async def slow_validation(*args, **kwargs):
        await asyncio.sleep(1)

    mocker.patch.object(dependencies, "run_in_threadpool", side_effect=slow_validation)
    app.dependency_overrides[get_api_config] = lambda: ApiServerConfig(
        validation_timeout_seconds=0.01
    )

    response = _upload(valid_archive)

    assert response.status_code == 504
    assert response.json()["error_kind"] == "Timeout"
