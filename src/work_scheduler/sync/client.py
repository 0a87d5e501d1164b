"""HTTP client for the Notion API.

Only the three calls the relay needs are implemented. Any object offering the
same three methods (see ``SyncBackend``) can stand in for the real client.
"""

import logging
from functools import partial
from typing import Any, Callable, Optional, Protocol

import requests

from work_scheduler.core.config import ConfigManager
from work_scheduler.sync.errors import NotionAPIError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.notion.com/v1"
DEFAULT_NOTION_VERSION = "2022-06-28"
DEFAULT_TIMEOUT_SECONDS = 30


class SyncBackend(Protocol):
    """Operations the relay needs from the external database."""

    def retrieve_schema(self, database_id: str) -> dict[str, Any]: ...

    def create_record(self, database_id: str, properties: dict[str, Any]) -> dict[str, Any]: ...

    def query_records(
        self, database_id: str, sorts: list[dict[str, str]]
    ) -> list[dict[str, Any]]: ...


BackendFactory = Callable[[str], SyncBackend]


class NotionClient:
    """Minimal Notion REST client bound to one integration token."""

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        notion_version: str = DEFAULT_NOTION_VERSION,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "Authorization": f"Bearer {api_token}",
            "Notion-Version": notion_version,
            "Content-Type": "application/json",
        }

    def _request(
        self, method: str, path: str, payload: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Perform one API call and return the decoded JSON body.

        Raises:
            NotionAPIError: On timeout, transport error, error status or a
                body that is not JSON
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(
                method, url, headers=self.headers, json=payload, timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise NotionAPIError(
                "timeout", message=f"Request to {url} timed out after {self.timeout}s"
            ) from e
        except requests.exceptions.RequestException as e:
            raise NotionAPIError("request_failed", message=f"Request to {url} failed: {e}") from e

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            raise NotionAPIError(
                body.get("code") or "http_error",
                response.status_code,
                body.get("message") or f"HTTP {response.status_code} from {url}",
            )

        try:
            data = response.json()
        except ValueError as e:
            raise NotionAPIError(
                "invalid_json", response.status_code, f"Response from {url} is not valid JSON"
            ) from e
        if not isinstance(data, dict):
            raise NotionAPIError(
                "invalid_json", response.status_code, f"Unexpected response body from {url}"
            )
        return data

    def retrieve_schema(self, database_id: str) -> dict[str, Any]:
        """Fetch database metadata, including its title and properties."""
        return self._request("GET", f"/databases/{database_id}")

    def create_record(self, database_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        """Create a page in the database and return it."""
        payload = {"parent": {"database_id": database_id}, "properties": properties}
        return self._request("POST", "/pages", payload)

    def query_records(
        self, database_id: str, sorts: list[dict[str, str]]
    ) -> list[dict[str, Any]]:
        """Return the first page of query results."""
        data = self._request("POST", f"/databases/{database_id}/query", {"sorts": sorts})
        results = data.get("results")
        if not isinstance(results, list):
            raise NotionAPIError("invalid_response", message="Query response has no results list")
        return results


def client_factory_from_config(config: ConfigManager) -> BackendFactory:
    """Build a token -> NotionClient factory using the ``sync`` config section."""
    return partial(
        NotionClient,
        base_url=config.get("sync.base_url", DEFAULT_BASE_URL),
        notion_version=config.get("sync.notion_version", DEFAULT_NOTION_VERSION),
        timeout=config.get("sync.timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
    )
