"""Entry endpoints for pushing to and pulling from Notion."""

from fastapi import APIRouter, Depends  # type: ignore[import-untyped]

from work_scheduler.api.dependencies import get_relay
from work_scheduler.api.models import (
    EntryRecord,
    ErrorResponse,
    PullEntriesRequest,
    PullEntriesResponse,
    PushEntryRequest,
    PushEntryResponse,
)
from work_scheduler.sync.relay import SyncRelay

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("", response_model=PushEntryResponse, responses=ERROR_RESPONSES)
def push_entry(
    request: PushEntryRequest,
    relay: SyncRelay = Depends(get_relay),
) -> PushEntryResponse:
    """Add one time entry to the Notion database.

    Example:
        >>> POST /api/entries
        >>> {"entry": {"project": "Acme", "description": "Review", "date": "2025-11-16",
        ...            "hours": 2}, "config": {"apiToken": "...", "databaseId": "..."}}
        {"success": true, "message": "Time entry added to Notion", "recordId": "..."}
    """
    config = request.config.to_sync_config() if request.config else None
    result = relay.push_entry(request.entry.to_entry(), config)
    return PushEntryResponse(record_id=result.record_id)


@router.post("/pull", response_model=PullEntriesResponse, responses=ERROR_RESPONSES)
def pull_entries(
    request: PullEntriesRequest,
    relay: SyncRelay = Depends(get_relay),
) -> PullEntriesResponse:
    """Fetch every entry from the Notion database, newest date first."""
    config = request.config.to_sync_config() if request.config else None
    entries = relay.pull_entries(config)
    return PullEntriesResponse(entries=[EntryRecord.from_entry(e) for e in entries])
