"""Health check router."""

from datetime import UTC, datetime

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health():
    """Return health status with the current server time."""
    return {"status": "OK", "timestamp": datetime.now(UTC).isoformat()}
