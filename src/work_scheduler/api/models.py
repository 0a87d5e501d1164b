"""Pydantic models for API requests and responses.

Field names are snake_case in Python and camelCase on the wire, matching the
JSON the browser front-end sends and expects.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator  # type: ignore[import-untyped]

from work_scheduler.core.models import (
    AggregateStats,
    ProjectTotal,
    SyncConfig,
    TimeEntry,
    new_entry_id,
)
from work_scheduler.sync.mapping import parse_entry_date, parse_timestamp


class WireModel(BaseModel):
    """Base model accepting both field names and camelCase aliases."""

    class Config:
        """Pydantic configuration."""

        populate_by_name = True


# ============================================================================
# Entries
# ============================================================================


class EntryRecord(WireModel):
    """Time entry as exchanged with the front-end.

    Nothing is required here: pulled records and stored snapshots may carry
    defaulted fields.
    """

    id: str = ""
    project: str = ""
    description: str = ""
    date: str = ""
    hours: float = Field(0.0, ge=0, allow_inf_nan=False)
    start_time: str = Field("", alias="startTime")
    end_time: str = Field("", alias="endTime")
    created_at: Optional[str] = Field(None, alias="createdAt")

    @classmethod
    def from_entry(cls, entry: TimeEntry) -> "EntryRecord":
        """Create a wire record from a TimeEntry.

        Only the calendar date is sent for ``date``.
        """
        return cls(
            id=entry.id,
            project=entry.project,
            description=entry.description,
            date=entry.date.date().isoformat() if entry.date else "",
            hours=entry.hours,
            start_time=entry.start_time,
            end_time=entry.end_time,
            created_at=entry.created_at.isoformat(),
        )

    def to_entry(self) -> TimeEntry:
        """Convert to a TimeEntry, filling in id and creation time if absent."""
        return TimeEntry(
            id=self.id or new_entry_id(),
            project=self.project,
            description=self.description,
            date=parse_entry_date(self.date),
            hours=self.hours,
            start_time=self.start_time or "",
            end_time=self.end_time or "",
            created_at=parse_timestamp(self.created_at) or datetime.now(),
        )


class NewEntryPayload(EntryRecord):
    """Entry submitted for pushing; must satisfy the creation invariants."""

    project: str = Field(..., min_length=1, max_length=2000)
    description: str = Field(..., min_length=1, max_length=2000)
    date: str = Field(..., min_length=1, description="ISO date or datetime")
    hours: float = Field(..., gt=0, le=24, allow_inf_nan=False)

    @field_validator("project", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("date")
    @classmethod
    def _parseable_date(cls, value: str) -> str:
        if parse_entry_date(value) is None:
            raise ValueError("must be an ISO date (YYYY-MM-DD) or datetime")
        return value


# ============================================================================
# Sync requests
# ============================================================================


class SyncConfigPayload(WireModel):
    """Credentials for the external database."""

    api_token: Optional[str] = Field(None, alias="apiToken")
    database_id: Optional[str] = Field(None, alias="databaseId")

    def to_sync_config(self) -> Optional[SyncConfig]:
        return SyncConfig.from_values(self.api_token, self.database_id)


class ValidateConnectionRequest(SyncConfigPayload):
    """Request body for a connection check."""


class PushEntryRequest(WireModel):
    """Request body for pushing one entry."""

    entry: NewEntryPayload
    config: Optional[SyncConfigPayload] = None


class PullEntriesRequest(WireModel):
    """Request body for pulling all entries."""

    config: Optional[SyncConfigPayload] = None


class StatsRequest(WireModel):
    """Request body for computing statistics."""

    entries: list[EntryRecord] = Field(default_factory=list)
    now: Optional[datetime] = Field(None, description="Reference time, defaults to server time")


# ============================================================================
# Responses
# ============================================================================


class ConnectionResponse(WireModel):
    success: bool = True
    message: str = "Connection successful"
    title: str
    fields: list[str] = Field(default_factory=list)


class PushEntryResponse(WireModel):
    success: bool = True
    message: str = "Time entry added to Notion"
    record_id: str = Field(..., alias="recordId")


class PullEntriesResponse(WireModel):
    success: bool = True
    entries: list[EntryRecord] = Field(default_factory=list)


class ProjectTotalResponse(WireModel):
    project: str
    hours: float
    entries: int

    @classmethod
    def from_total(cls, total: ProjectTotal) -> "ProjectTotalResponse":
        return cls(project=total.project, hours=total.hours, entries=total.entries)


class StatsResponse(WireModel):
    """Aggregate statistics over the submitted entries."""

    total_hours: float = Field(..., alias="totalHours")
    current_month_hours: float = Field(..., alias="currentMonthHours")
    last_month_hours: float = Field(..., alias="lastMonthHours")
    project_breakdown: dict[str, ProjectTotalResponse] = Field(..., alias="projectBreakdown")
    top_projects: list[ProjectTotalResponse] = Field(..., alias="topProjects")
    unique_days: int = Field(..., alias="uniqueDays")
    daily_average: float = Field(..., alias="dailyAverage")
    monthly_change_percent: float = Field(..., alias="monthlyChangePercent")
    total_entries: int = Field(..., alias="totalEntries")

    @classmethod
    def from_stats(cls, stats: AggregateStats) -> "StatsResponse":
        return cls(
            total_hours=stats.total_hours,
            current_month_hours=stats.current_month_hours,
            last_month_hours=stats.last_month_hours,
            project_breakdown={
                name: ProjectTotalResponse.from_total(total)
                for name, total in stats.project_breakdown.items()
            },
            top_projects=[ProjectTotalResponse.from_total(t) for t in stats.top_projects],
            unique_days=stats.unique_days,
            daily_average=stats.daily_average,
            monthly_change_percent=stats.monthly_change_percent,
            total_entries=stats.total_entries,
        )


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    timestamp: datetime = Field(..., description="Current server time")
    version: str = Field(..., description="API version")


class ErrorResponse(BaseModel):
    """Response model for errors."""

    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Machine-readable error code")
