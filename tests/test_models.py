"""Tests for core data models."""

from datetime import datetime

import pytest

from work_scheduler.core.models import SyncConfig, TimeEntry


class TestTimeEntry:
    """Test TimeEntry model."""

    def test_create_valid_entry(self) -> None:
        """Test creating an entry with all fields."""
        entry = TimeEntry.create(
            "  Acme  ",
            " Code review ",
            datetime(2025, 11, 14),
            2.5,
            start_time="09:00",
            end_time="11:30",
        )

        assert entry.project == "Acme"
        assert entry.description == "Code review"
        assert entry.hours == 2.5
        assert entry.start_time == "09:00"
        assert entry.end_time == "11:30"
        assert entry.id
        assert isinstance(entry.created_at, datetime)

    def test_create_defaults_optional_times_to_empty(self) -> None:
        """Test that missing clock values become empty strings."""
        entry = TimeEntry.create("Acme", "Review", datetime(2025, 11, 14), 1)

        assert entry.start_time == ""
        assert entry.end_time == ""
        assert isinstance(entry.hours, float)

    def test_create_assigns_unique_ids(self) -> None:
        """Test that every created entry gets its own id."""
        first = TimeEntry.create("Acme", "Review", datetime(2025, 11, 14), 1)
        second = TimeEntry.create("Acme", "Review", datetime(2025, 11, 14), 1)

        assert first.id != second.id

    @pytest.mark.parametrize("project", ["", "   "])
    def test_create_requires_project(self, project: str) -> None:
        """Test that a blank project is rejected."""
        with pytest.raises(ValueError, match="Project"):
            TimeEntry.create(project, "Review", datetime(2025, 11, 14), 1)

    def test_create_requires_description(self) -> None:
        """Test that a blank description is rejected."""
        with pytest.raises(ValueError, match="Description"):
            TimeEntry.create("Acme", " ", datetime(2025, 11, 14), 1)

    @pytest.mark.parametrize("hours", [0, -1, 24.5, float("nan"), float("inf"), float("-inf")])
    def test_create_rejects_hours_out_of_range(self, hours: float) -> None:
        """Test that hours must lie in (0, 24]."""
        with pytest.raises(ValueError, match="Hours"):
            TimeEntry.create("Acme", "Review", datetime(2025, 11, 14), hours)

    def test_create_accepts_full_day(self) -> None:
        """Test that exactly 24 hours is allowed."""
        entry = TimeEntry.create("Acme", "Review", datetime(2025, 11, 14), 24)
        assert entry.hours == 24

    def test_entry_is_immutable(self) -> None:
        """Test that entries cannot be changed after creation."""
        entry = TimeEntry.create("Acme", "Review", datetime(2025, 11, 14), 1)

        with pytest.raises(Exception):
            entry.hours = 5  # type: ignore[misc]

    def test_day_ignores_time_of_day(self) -> None:
        """Test that day truncates the timestamp."""
        entry = TimeEntry("Acme", "Review", datetime(2025, 11, 14, 23, 59), 1)
        assert entry.day == datetime(2025, 11, 14).date()

    def test_day_is_none_without_date(self) -> None:
        """Test that an entry without a date has no day."""
        entry = TimeEntry("Acme", "Review", None, 1)
        assert entry.day is None

    def test_to_dict_and_from_dict(self) -> None:
        """Test serialization keeps every field."""
        entry = TimeEntry.create(
            "Acme", "Review", datetime(2025, 11, 14), 1.25, start_time="09:00"
        )

        restored = TimeEntry.from_dict(entry.to_dict())

        assert restored == entry

    def test_from_dict_with_empty_date(self) -> None:
        """Test that an empty date string maps to None."""
        data = TimeEntry("Acme", "Review", None, 0).to_dict()
        assert data["date"] == ""

        restored = TimeEntry.from_dict(data)
        assert restored.date is None
        assert restored.hours == 0


class TestSyncConfig:
    """Test SyncConfig model."""

    def test_from_values_complete(self) -> None:
        """Test building a config from both values."""
        config = SyncConfig.from_values("secret", "db-1")

        assert config is not None
        assert config.api_token == "secret"
        assert config.database_id == "db-1"
        assert config.is_complete

    @pytest.mark.parametrize(
        "token,database_id", [(None, "db"), ("secret", None), ("", "db"), ("secret", "")]
    )
    def test_from_values_incomplete(self, token, database_id) -> None:  # type: ignore[no-untyped-def]
        """Test that a missing value means no config at all."""
        assert SyncConfig.from_values(token, database_id) is None

    def test_is_complete_false_for_empty_field(self) -> None:
        """Test is_complete with an empty database id."""
        assert not SyncConfig("secret", "").is_complete
