"""Tests for API foundation (server, middleware, dependencies)."""

from fastapi.testclient import TestClient  # type: ignore[import-untyped]

from work_scheduler import __version__
from work_scheduler.api import create_app
from work_scheduler.api.dependencies import get_relay
from work_scheduler.core.config import ConfigManager
from work_scheduler.sync.client import NotionClient
from work_scheduler.sync.relay import SyncRelay


class TestAppCreation:
    """Test FastAPI application creation."""

    def test_create_app_default(self, test_config: ConfigManager) -> None:
        """Test creating app with explicit config and no relay."""
        app = create_app(test_config)

        assert app.title == "Work Scheduler API"
        assert app.version == __version__
        assert app.state.relay is None

    def test_app_has_docs(self, client: TestClient) -> None:
        response = client.get("/docs")
        assert response.status_code == 200

        response = client.get("/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/connection/validate" in paths
        assert "/api/entries" in paths
        assert "/api/entries/pull" in paths
        assert "/api/stats" in paths


class TestSystemEndpoints:
    """Test root and health endpoints."""

    def test_root(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Work Scheduler API"
        assert data["health"] == "/api/health"

    def test_health(self, client: TestClient, fake_notion) -> None:  # type: ignore[no-untyped-def]
        """Test health check does not touch Notion."""
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__
        assert "timestamp" in data
        assert fake_notion.calls == []


class TestMiddleware:
    """Test CORS and error handling."""

    def test_cors_preflight(self, client: TestClient) -> None:
        response = client.options(
            "/api/health",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_cors_disabled(self, test_config: ConfigManager) -> None:
        test_config.set("api.cors.enabled", False)
        client = TestClient(create_app(test_config))

        response = client.get("/api/health", headers={"Origin": "http://localhost:3000"})

        assert "access-control-allow-origin" not in response.headers

    def test_sync_error_shape(self, client: TestClient) -> None:
        """Test relay errors become {error, error_code} bodies."""
        response = client.post("/api/entries/pull", json={})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Notion configuration not found",
            "error_code": "missing_config",
        }


class TestDependencies:
    """Test dependency helpers."""

    def test_default_relay_uses_notion_client(self, test_config: ConfigManager) -> None:
        app = create_app(test_config)

        class FakeRequest:
            pass

        request = FakeRequest()
        request.app = app  # type: ignore[attr-defined]

        relay = get_relay(request)  # type: ignore[arg-type]

        assert isinstance(relay, SyncRelay)
        assert isinstance(relay.client_factory("secret"), NotionClient)

    def test_injected_relay_wins(self, test_config: ConfigManager, fake_notion) -> None:  # type: ignore[no-untyped-def]
        relay = SyncRelay(fake_notion.factory)
        app = create_app(test_config, relay)

        class FakeRequest:
            pass

        request = FakeRequest()
        request.app = app  # type: ignore[attr-defined]

        assert get_relay(request) is relay  # type: ignore[arg-type]
