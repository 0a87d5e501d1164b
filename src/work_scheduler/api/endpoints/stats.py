"""Statistics endpoint."""

from datetime import datetime

from fastapi import APIRouter  # type: ignore[import-untyped]

from work_scheduler.analysis.stats import compute_stats
from work_scheduler.api.models import StatsRequest, StatsResponse

router = APIRouter()


@router.post("", response_model=StatsResponse)
async def get_stats(request: StatsRequest) -> StatsResponse:
    """Compute aggregate statistics over the submitted entries.

    The caller owns the entry collection and sends a snapshot; nothing is
    stored. ``now`` decides which month counts as current.
    """
    entries = [record.to_entry() for record in request.entries]
    now = request.now or datetime.now()
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    return StatsResponse.from_stats(compute_stats(entries, now))
