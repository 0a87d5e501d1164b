"""Errors raised while talking to the external workspace database.

The relay reports every failure as one of a small, flat set of outcomes.
Each carries a short user-facing message, the HTTP status the API answers
with and a machine-readable code.
"""

from typing import Optional, Sequence


class NotionAPIError(Exception):
    """Raw failure reported by the Notion API or the transport below it.

    Attributes:
        code: Notion error code (e.g. ``object_not_found``) or a transport
            code such as ``timeout``
        status: HTTP status, None when no response was received
    """

    def __init__(self, code: str, status: Optional[int] = None, message: str = ""):
        super().__init__(message or code)
        self.code = code
        self.status = status
        self.message = message or code


class SyncError(Exception):
    """Base class for relay outcomes other than success."""

    status_code = 500
    error_code = "sync_error"
    default_message = "Synchronization failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingCredentials(SyncError):
    status_code = 400
    error_code = "missing_credentials"
    default_message = "API token and database ID are required"


class MissingConfig(SyncError):
    status_code = 400
    error_code = "missing_config"
    default_message = "Notion configuration not found"


class NotFound(SyncError):
    status_code = 404
    error_code = "not_found"
    default_message = "Database not found. Please check the database ID."


class Unauthorized(SyncError):
    status_code = 401
    error_code = "unauthorized"
    default_message = "Invalid API token or database not shared with integration."


class SchemaMismatch(SyncError):
    """The database lacks one or more mandatory properties."""

    status_code = 400
    error_code = "schema_mismatch"

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            f"Database is missing required properties: {', '.join(self.missing_fields)}"
        )


class ConnectionFailed(SyncError):
    error_code = "connection_failed"
    default_message = "Failed to connect to Notion. Please check your credentials."


class PushFailed(SyncError):
    error_code = "push_failed"
    default_message = "Failed to add entry to Notion"


class PullFailed(SyncError):
    error_code = "pull_failed"
    default_message = "Failed to sync entries from Notion"
