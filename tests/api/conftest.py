"""Fixtures for API tests."""

import tempfile
from pathlib import Path

import pytest  # type: ignore[import-not-found]
from fastapi.testclient import TestClient  # type: ignore[import-untyped]

from work_scheduler.api import create_app
from work_scheduler.core.config import ConfigManager
from work_scheduler.sync.relay import SyncRelay


@pytest.fixture
def test_config():  # type: ignore[no-untyped-def]
    """Create a test configuration."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield ConfigManager(Path(tmpdir) / "config.yml")


@pytest.fixture
def test_app(test_config: ConfigManager, fake_notion):  # type: ignore[no-untyped-def]
    """Create a test FastAPI application backed by the Notion fake."""
    return create_app(test_config, SyncRelay(fake_notion.factory))


@pytest.fixture
def client(test_app):  # type: ignore[no-untyped-def]
    """Create a test client."""
    return TestClient(test_app)


@pytest.fixture
def credentials() -> dict:
    return {"apiToken": "secret", "databaseId": "db-1"}
