"""API endpoints.

Available routers:
- system: Health check
- connection: Notion connection validation
- entries: Push and pull entries
- stats: Aggregate statistics
"""

__all__ = ["system", "connection", "entries", "stats"]

from work_scheduler.api.endpoints import connection, entries, stats, system  # noqa: F401
