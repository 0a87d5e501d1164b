"""Tests for the statistics endpoint."""

import pytest  # type: ignore[import-not-found]
from fastapi.testclient import TestClient  # type: ignore[import-untyped]


def wire_entry(project: str, hours: float, day: str) -> dict:
    return {"project": project, "description": "Work", "date": day, "hours": hours}


class TestStats:
    """Test POST /api/stats."""

    def test_empty(self, client: TestClient) -> None:
        response = client.post("/api/stats", json={"entries": []})

        assert response.status_code == 200
        data = response.json()
        assert data["totalHours"] == 0
        assert data["topProjects"] == []
        assert data["projectBreakdown"] == {}
        assert data["uniqueDays"] == 0
        assert data["dailyAverage"] == 0
        assert data["monthlyChangePercent"] == 0
        assert data["totalEntries"] == 0

    def test_stats(self, client: TestClient) -> None:
        entries = [
            wire_entry("A", 2, "2025-11-14"),
            wire_entry("B", 3, "2025-11-14"),
            wire_entry("A", 5, "2025-10-02"),
        ]

        response = client.post(
            "/api/stats", json={"entries": entries, "now": "2025-11-16T12:00:00"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totalHours"] == 10
        assert data["currentMonthHours"] == 5
        assert data["lastMonthHours"] == 5
        assert data["monthlyChangePercent"] == 0
        assert data["uniqueDays"] == 2
        assert data["dailyAverage"] == 5
        assert data["totalEntries"] == 3
        assert data["topProjects"][0] == {"project": "A", "hours": 7, "entries": 2}
        assert data["projectBreakdown"]["B"]["hours"] == 3

    def test_monthly_change(self, client: TestClient) -> None:
        entries = [wire_entry("A", 4, "2025-10-10"), wire_entry("A", 6, "2025-11-10")]

        response = client.post(
            "/api/stats", json={"entries": entries, "now": "2025-11-16T12:00:00"}
        )

        assert response.json()["monthlyChangePercent"] == pytest.approx(50.0)

    def test_entries_without_date(self, client: TestClient) -> None:
        """Test snapshot entries with defaulted fields are accepted."""
        entries = [{"project": "A", "hours": 2, "date": ""}, {"project": "B"}]

        response = client.post(
            "/api/stats", json={"entries": entries, "now": "2025-11-16T12:00:00"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totalHours"] == 2
        assert data["currentMonthHours"] == 0
        assert data["uniqueDays"] == 0
        assert data["totalEntries"] == 2

    def test_rejects_negative_hours(self, client: TestClient) -> None:
        response = client.post(
            "/api/stats", json={"entries": [wire_entry("A", -1, "2025-11-14")]}
        )

        assert response.status_code == 422
