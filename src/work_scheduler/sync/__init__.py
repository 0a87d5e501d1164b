"""Synchronization with an external Notion database.

The relay validates credentials, pushes entries and pulls them back. It keeps
no state between calls; credentials travel with every request.
"""

__all__ = ["ConnectionResult", "PushResult", "SyncRelay"]

from work_scheduler.sync.relay import ConnectionResult, PushResult, SyncRelay  # noqa: F401
