"""Core data models for time tracking."""

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

MAX_HOURS_PER_ENTRY = 24


def new_entry_id() -> str:
    """Generate a fresh opaque entry identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class TimeEntry:
    """A single logged unit of work.

    Attributes:
        project: Project label
        description: What was done
        date: Day the work happened (time of day is not significant)
        hours: Hours worked
        start_time: Optional free-text clock value (e.g. "09:00")
        end_time: Optional free-text clock value
        id: Opaque unique identifier
        created_at: When this record was created
    """

    project: str
    description: str
    date: Optional[datetime]
    hours: float
    start_time: str = ""
    end_time: str = ""
    id: str = field(default_factory=new_entry_id)
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def day(self) -> Optional[date]:
        """Calendar day of this entry, None when the date is unknown."""
        return self.date.date() if self.date else None

    @classmethod
    def create(
        cls,
        project: str,
        description: str,
        day: datetime,
        hours: float,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> "TimeEntry":
        """Create a validated entry.

        Args:
            project: Project label (required)
            description: Work description (required)
            day: Date of the work
            hours: Hours worked, in (0, 24]
            start_time: Optional start clock value
            end_time: Optional end clock value

        Returns:
            New TimeEntry with a fresh id and creation timestamp

        Raises:
            ValueError: If any field is invalid
        """
        project = project.strip()
        description = description.strip()

        if not project:
            raise ValueError("Project name is required")
        if not description:
            raise ValueError("Description is required")
        if not math.isfinite(hours):
            raise ValueError("Hours must be a finite number")
        if hours <= 0:
            raise ValueError("Hours must be greater than 0")
        if hours > MAX_HOURS_PER_ENTRY:
            raise ValueError(f"Hours cannot exceed {MAX_HOURS_PER_ENTRY}")

        return cls(
            project=project,
            description=description,
            date=day,
            hours=float(hours),
            start_time=(start_time or "").strip(),
            end_time=(end_time or "").strip(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for CSV/JSON serialization."""
        return {
            "id": self.id,
            "project": self.project,
            "description": self.description,
            "date": self.date.isoformat() if self.date else "",
            "hours": self.hours,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeEntry":
        """Create TimeEntry from dictionary (CSV/JSON deserialization)."""
        return cls(
            id=data["id"],
            project=data["project"],
            description=data["description"],
            date=datetime.fromisoformat(data["date"]) if data["date"] else None,
            hours=float(data["hours"]) if data["hours"] else 0.0,
            start_time=data.get("start_time") or "",
            end_time=data.get("end_time") or "",
            created_at=datetime.fromisoformat(data["created_at"]),
        )


@dataclass(frozen=True)
class SyncConfig:
    """Credentials for the external workspace database.

    Attributes:
        api_token: Integration secret
        database_id: Identifier of the target database
    """

    api_token: str
    database_id: str

    @property
    def is_complete(self) -> bool:
        """Both credentials present and non-empty."""
        return bool(self.api_token) and bool(self.database_id)

    @classmethod
    def from_values(
        cls, api_token: Optional[str], database_id: Optional[str]
    ) -> Optional["SyncConfig"]:
        """Build a config, or None when either value is missing."""
        if not api_token or not database_id:
            return None
        return cls(api_token=api_token, database_id=database_id)


@dataclass
class ProjectTotal:
    """Accumulated hours and entry count for one project."""

    project: str
    hours: float = 0.0
    entries: int = 0


@dataclass
class AggregateStats:
    """Statistics derived from a collection of entries. Never persisted."""

    total_hours: float = 0.0
    current_month_hours: float = 0.0
    last_month_hours: float = 0.0
    project_breakdown: dict[str, ProjectTotal] = field(default_factory=dict)
    top_projects: list[ProjectTotal] = field(default_factory=list)
    unique_days: int = 0
    daily_average: float = 0.0
    monthly_change_percent: float = 0.0
    total_entries: int = 0


@dataclass
class DaySummary:
    """Entries and total hours for one calendar day."""

    day: date
    entries: list[TimeEntry] = field(default_factory=list)
    total_hours: float = 0.0


@dataclass
class WeekSummary:
    """Monday-to-Sunday week view of entries."""

    week_start: date
    week_end: date
    days: list[DaySummary] = field(default_factory=list)
    total_hours: float = 0.0
    daily_average: float = 0.0
    days_worked: int = 0
    total_entries: int = 0
