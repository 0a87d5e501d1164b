"""Pytest configuration and shared fixtures."""

from typing import Any, Optional

import pytest  # type: ignore[import-not-found]

from work_scheduler.sync.mapping import REQUIRED_FIELDS


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: Integration tests")


class FakeNotion:
    """In-memory stand-in for the Notion backend.

    ``factory`` is passed to SyncRelay as the client factory; every call is
    recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.schema: dict[str, Any] = {
            "object": "database",
            "title": [{"plain_text": "Work Log"}],
            "properties": {name: {"id": name.lower()} for name in REQUIRED_FIELDS},
        }
        self.records: list[dict[str, Any]] = []
        self.error: Optional[Exception] = None
        self.tokens: list[str] = []
        self.calls: list[tuple[str, Any]] = []
        self.created: list[dict[str, Any]] = []

    def factory(self, api_token: str) -> "FakeNotion":
        self.tokens.append(api_token)
        return self

    def retrieve_schema(self, database_id: str) -> dict[str, Any]:
        self.calls.append(("retrieve_schema", database_id))
        if self.error:
            raise self.error
        return self.schema

    def create_record(self, database_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create_record", database_id))
        if self.error:
            raise self.error
        self.created.append(properties)
        return {"object": "page", "id": f"page-{len(self.created)}"}

    def query_records(self, database_id: str, sorts: list[dict[str, str]]) -> list[dict[str, Any]]:
        self.calls.append(("query_records", (database_id, sorts)))
        if self.error:
            raise self.error
        return self.records


@pytest.fixture
def fake_notion() -> FakeNotion:
    """Create an in-memory Notion backend."""
    return FakeNotion()


def notion_page(
    page_id: str = "page-1",
    project: Optional[str] = "Acme",
    description: Optional[str] = "Review",
    day: Optional[str] = "2025-11-14",
    hours: Optional[float] = 2.0,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    created_time: str = "2025-11-14T10:00:00.000Z",
) -> dict[str, Any]:
    """Build a Notion page payload; ``None`` leaves a property out."""
    properties: dict[str, Any] = {}
    if project is not None:
        properties["Project"] = {"type": "title", "title": [{"plain_text": project}]}
    if description is not None:
        properties["Description"] = {
            "type": "rich_text",
            "rich_text": [{"plain_text": description}],
        }
    if day is not None:
        properties["Date"] = {"type": "date", "date": {"start": day, "end": None}}
    if hours is not None:
        properties["Hours"] = {"type": "number", "number": hours}
    if start_time is not None:
        properties["Start Time"] = {"type": "rich_text", "rich_text": [{"plain_text": start_time}]}
    if end_time is not None:
        properties["End Time"] = {"type": "rich_text", "rich_text": [{"plain_text": end_time}]}
    return {
        "object": "page",
        "id": page_id,
        "created_time": created_time,
        "properties": properties,
    }


@pytest.fixture
def make_page():
    """Factory for Notion page payloads."""
    return notion_page
