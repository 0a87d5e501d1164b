"""Aggregate statistics over time entries.

Everything in this module is a pure function of its arguments: entries and a
reference time go in, aggregates come out. Degenerate input (no entries, no
hours, no previous month) yields zeros rather than errors.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from work_scheduler.core.models import (
    AggregateStats,
    DaySummary,
    ProjectTotal,
    TimeEntry,
    WeekSummary,
)

TOP_PROJECTS_LIMIT = 5
DAYS_PER_WEEK = 7


def month_bounds(day: date) -> tuple[date, date]:
    """First and last calendar day of the month containing ``day``."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def previous_month_bounds(day: date) -> tuple[date, date]:
    """First and last calendar day of the month before the one containing ``day``."""
    first_of_month = day.replace(day=1)
    return month_bounds(first_of_month - timedelta(days=1))


def week_bounds(day: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=DAYS_PER_WEEK - 1)


def _within(entry: TimeEntry, start: date, end: date) -> bool:
    day = entry.day
    return day is not None and start <= day <= end


def _sum_hours(entries: Iterable[TimeEntry]) -> float:
    return sum((entry.hours for entry in entries), 0.0)


def _safe_ratio(numerator: float, denominator: float) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def project_breakdown(entries: Iterable[TimeEntry]) -> dict[str, ProjectTotal]:
    """Hours and entry count per project, keyed by the exact project label.

    Projects appear in the order they are first seen.
    """
    breakdown: dict[str, ProjectTotal] = {}
    for entry in entries:
        total = breakdown.get(entry.project)
        if total is None:
            total = breakdown[entry.project] = ProjectTotal(project=entry.project)
        total.hours += entry.hours
        total.entries += 1
    return breakdown


def top_projects(
    breakdown: dict[str, ProjectTotal], limit: int = TOP_PROJECTS_LIMIT
) -> list[ProjectTotal]:
    """Projects ordered by hours, most first.

    ``sorted`` is stable, so projects with equal hours keep first-seen order.
    """
    ranked = sorted(breakdown.values(), key=lambda total: total.hours, reverse=True)
    return ranked[:limit]


def project_share(hours: float, total_hours: float) -> float:
    """Percentage of ``total_hours`` represented by ``hours``."""
    return _safe_ratio(hours, total_hours) * 100


def compute_stats(entries: Sequence[TimeEntry], now: datetime) -> AggregateStats:
    """Compute aggregate statistics for a collection of entries.

    Args:
        entries: Full entry collection
        now: Reference time deciding which month is "current"

    Returns:
        Freshly computed AggregateStats
    """
    today = now.date()
    current_start, current_end = month_bounds(today)
    last_start, last_end = previous_month_bounds(today)

    total_hours = _sum_hours(entries)
    current_month_hours = _sum_hours(e for e in entries if _within(e, current_start, current_end))
    last_month_hours = _sum_hours(e for e in entries if _within(e, last_start, last_end))

    breakdown = project_breakdown(entries)
    unique_days = len({entry.day for entry in entries if entry.day is not None})

    monthly_change = 0.0
    if last_month_hours > 0:
        monthly_change = (current_month_hours - last_month_hours) / last_month_hours * 100

    return AggregateStats(
        total_hours=total_hours,
        current_month_hours=current_month_hours,
        last_month_hours=last_month_hours,
        project_breakdown=breakdown,
        top_projects=top_projects(breakdown),
        unique_days=unique_days,
        daily_average=_safe_ratio(total_hours, unique_days),
        monthly_change_percent=monthly_change,
        total_entries=len(entries),
    )


def entries_for_date(entries: Iterable[TimeEntry], day: date) -> list[TimeEntry]:
    """Entries logged on the given calendar day, in collection order."""
    return [entry for entry in entries if entry.day == day]


def total_hours_for_date(entries: Iterable[TimeEntry], day: date) -> float:
    return _sum_hours(entries_for_date(entries, day))


def month_totals(entries: Sequence[TimeEntry], day: date) -> dict[date, float]:
    """Total hours for every calendar day of the month containing ``day``.

    Days without entries are present with 0.0.
    """
    first, last = month_bounds(day)
    days = (first + timedelta(days=offset) for offset in range((last - first).days + 1))
    return {current: total_hours_for_date(entries, current) for current in days}


def day_summary(entries: Iterable[TimeEntry], day: date) -> DaySummary:
    day_entries = entries_for_date(entries, day)
    return DaySummary(day=day, entries=day_entries, total_hours=_sum_hours(day_entries))


def week_summary(entries: Sequence[TimeEntry], day: date) -> WeekSummary:
    """Monday-to-Sunday view of the week containing ``day``.

    The daily average divides by all seven days, worked or not.
    """
    week_start, week_end = week_bounds(day)
    days = [
        day_summary(entries, week_start + timedelta(days=offset))
        for offset in range(DAYS_PER_WEEK)
    ]
    total = sum((summary.total_hours for summary in days), 0.0)

    return WeekSummary(
        week_start=week_start,
        week_end=week_end,
        days=days,
        total_hours=total,
        daily_average=total / DAYS_PER_WEEK,
        days_worked=sum(1 for summary in days if summary.total_hours > 0),
        total_entries=sum(len(summary.entries) for summary in days),
    )
