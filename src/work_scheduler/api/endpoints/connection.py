"""Connection endpoint for checking Notion credentials."""

from fastapi import APIRouter, Depends  # type: ignore[import-untyped]

from work_scheduler.api.dependencies import get_relay
from work_scheduler.api.models import ConnectionResponse, ErrorResponse, ValidateConnectionRequest
from work_scheduler.sync.relay import SyncRelay

router = APIRouter()


@router.post(
    "/validate",
    response_model=ConnectionResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def validate_connection(
    request: ValidateConnectionRequest,
    relay: SyncRelay = Depends(get_relay),
) -> ConnectionResponse:
    """Check credentials against Notion and verify the database schema.

    The database must have ``Project``, ``Description``, ``Date`` and
    ``Hours`` properties.

    Example:
        >>> POST /api/connection/validate
        >>> {"apiToken": "secret_...", "databaseId": "abc123"}
        {
            "success": true,
            "message": "Connection successful",
            "title": "Work Log",
            "fields": ["Project", "Description", "Date", "Hours"]
        }
    """
    result = relay.validate_connection(request.api_token, request.database_id)
    return ConnectionResponse(title=result.title, fields=result.fields)
