"""Stateless relay between local time entries and a Notion database.

Each operation makes at most one call to the external service and never
retries. Failures are logged and re-raised as one of the ``SyncError``
subclasses in ``work_scheduler.sync.errors``.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from work_scheduler.core.models import SyncConfig, TimeEntry
from work_scheduler.sync.client import BackendFactory, NotionClient
from work_scheduler.sync.errors import (
    ConnectionFailed,
    MissingConfig,
    MissingCredentials,
    NotFound,
    NotionAPIError,
    PullFailed,
    PushFailed,
    SchemaMismatch,
    Unauthorized,
)
from work_scheduler.sync.mapping import (
    DATE,
    database_title,
    entry_to_properties,
    missing_required_fields,
    record_to_entry,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODE = "object_not_found"
UNAUTHORIZED_CODE = "unauthorized"


@dataclass
class ConnectionResult:
    """Outcome of a successful connection check."""

    title: str
    fields: list[str] = field(default_factory=list)


@dataclass
class PushResult:
    """Outcome of a successful push."""

    record_id: str


def _require_config(config: Optional[SyncConfig]) -> SyncConfig:
    if config is None or not config.is_complete:
        raise MissingConfig()
    return config


class SyncRelay:
    """Validate, push and pull against the external database.

    Args:
        client_factory: Callable turning an API token into a backend.
            Defaults to ``NotionClient``.
    """

    def __init__(self, client_factory: Optional[BackendFactory] = None):
        self.client_factory: BackendFactory = client_factory or NotionClient

    def validate_connection(
        self, api_token: Optional[str], database_id: Optional[str]
    ) -> ConnectionResult:
        """Check that credentials work and the database has the right shape.

        Raises:
            MissingCredentials: Token or database id empty (nothing is sent)
            NotFound: Database does not exist
            Unauthorized: Token rejected
            SchemaMismatch: Mandatory properties are missing
            ConnectionFailed: Any other failure
        """
        if not api_token or not database_id:
            raise MissingCredentials()

        try:
            schema = self.client_factory(api_token).retrieve_schema(database_id)
        except NotionAPIError as e:
            logger.error("Notion connection error (%s): %s", e.code, e.message)
            if e.code == NOT_FOUND_CODE:
                raise NotFound() from e
            if e.code == UNAUTHORIZED_CODE:
                raise Unauthorized() from e
            raise ConnectionFailed() from e
        except Exception as e:
            logger.exception("Unexpected error while validating connection")
            raise ConnectionFailed() from e

        missing = missing_required_fields(schema)
        if missing:
            raise SchemaMismatch(missing)

        properties = schema.get("properties") or {}
        return ConnectionResult(title=database_title(schema), fields=list(properties))

    def push_entry(self, entry: TimeEntry, config: Optional[SyncConfig]) -> PushResult:
        """Create a record for ``entry`` in the configured database.

        Raises:
            MissingConfig: No complete config given
            PushFailed: The external call failed
        """
        config = _require_config(config)
        properties = entry_to_properties(entry)

        try:
            record = self.client_factory(config.api_token).create_record(
                config.database_id, properties
            )
        except Exception as e:
            logger.error("Error adding entry %s to Notion: %s", entry.id, e)
            raise PushFailed() from e

        record_id = record.get("id")
        if not record_id:
            logger.error("Notion returned no record id for entry %s", entry.id)
            raise PushFailed()

        logger.info("Pushed entry %s as record %s", entry.id, record_id)
        return PushResult(record_id=str(record_id))

    def pull_entries(self, config: Optional[SyncConfig]) -> list[TimeEntry]:
        """Fetch all records, newest date first, as TimeEntry objects.

        Malformed records are defaulted field by field rather than dropped.

        Raises:
            MissingConfig: No complete config given
            PullFailed: The external call failed; nothing is returned
        """
        config = _require_config(config)

        try:
            records = self.client_factory(config.api_token).query_records(
                config.database_id, [{"property": DATE, "direction": "descending"}]
            )
        except Exception as e:
            logger.error("Error syncing from Notion: %s", e)
            raise PullFailed() from e

        entries = [record_to_entry(record) for record in records if isinstance(record, dict)]
        logger.info("Pulled %d entries from Notion", len(entries))
        return entries
