"""System endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter  # type: ignore[import-untyped]

from work_scheduler import __version__
from work_scheduler.api.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint.

    Liveness only; it does not contact Notion.

    Example:
        >>> GET /api/health
        {
            "status": "ok",
            "timestamp": "2025-11-16T10:30:00Z",
            "version": "0.3.0"
        }
    """
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc), version=__version__)
