"""REST API for Work Scheduler.

This module provides a FastAPI-based relay between the browser front-end and
a Notion database, plus a statistics endpoint.

Endpoints:
- POST /api/connection/validate - check credentials and database schema
- POST /api/entries - push one entry to Notion
- POST /api/entries/pull - pull all entries from Notion
- POST /api/stats - aggregate statistics over submitted entries
- GET /api/health - liveness

Usage:
    # Start server
    work-scheduler serve

    # Access API docs
    http://localhost:3001/docs
"""

__all__ = ["create_app", "run_server"]

from work_scheduler.api.server import create_app, run_server  # noqa: F401
