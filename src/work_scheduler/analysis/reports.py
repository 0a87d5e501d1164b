"""Terminal rendering of entries, day/week/month views and statistics."""

import calendar
from datetime import date, datetime
from typing import Optional, Sequence

from rich.console import Console  # type: ignore[import-not-found]
from rich.markup import escape  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]
from rich.text import Text  # type: ignore[import-not-found]

from work_scheduler.analysis.stats import (
    compute_stats,
    day_summary,
    month_totals,
    previous_month_bounds,
    project_share,
    week_summary,
)
from work_scheduler.core.models import TimeEntry

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def format_hours(hours: float) -> str:
    """Format hours with one decimal, e.g. ``7.5h``."""
    return f"{hours:.1f}h"


def format_time_range(entry: TimeEntry) -> str:
    """Clock range of an entry, e.g. ``09:00 - 12:30``, or an empty string."""
    if entry.start_time and entry.end_time:
        return f"{entry.start_time} - {entry.end_time}"
    return entry.start_time or entry.end_time


class ReportGenerator:
    """Render time entries as rich tables."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize report generator.

        Args:
            console: Rich console for output. Creates default if None.
        """
        self.console = console or Console()

    def entries_table(self, entries: Sequence[TimeEntry], title: str = "Time Entries") -> None:
        """Print a flat table of entries."""
        table = Table(title=title)
        table.add_column("Date", style="cyan")
        table.add_column("Project", style="blue")
        table.add_column("Description", style="bold")
        table.add_column("Time", style="dim")
        table.add_column("Hours", style="magenta", justify="right")
        table.add_column("ID", style="dim")

        for entry in entries:
            table.add_row(
                entry.day.isoformat() if entry.day else "-",
                escape(entry.project) or "-",
                escape(entry.description) or "-",
                escape(format_time_range(entry)) or "-",
                format_hours(entry.hours),
                escape(entry.id),
            )

        self.console.print(table)

    def day_report(self, entries: Sequence[TimeEntry], day: date) -> None:
        """Print entries and the total for a single day."""
        summary = day_summary(entries, day)
        heading = f"{day:%B} {day.day}, {day.year}"
        self.console.print(f"\n[bold cyan]{heading}[/bold cyan]\n")

        if not summary.entries:
            self.console.print("[yellow]No time entries for this date[/yellow]")
            return

        for entry in summary.entries:
            self.console.print(
                f"  [bold]{escape(entry.project)}[/bold] "
                f"[magenta]{format_hours(entry.hours)}[/magenta]"
            )
            self.console.print(f"    [dim]{escape(entry.description)}[/dim]")

        self.console.print(f"\n[bold]Total:[/bold] {format_hours(summary.total_hours)}")

    def week_report(
        self, entries: Sequence[TimeEntry], day: date, today: Optional[date] = None
    ) -> None:
        """Print the Monday-to-Sunday week containing ``day``."""
        if today is None:
            today = datetime.now().date()
        summary = week_summary(entries, day)

        self.console.print(
            f"\n[bold cyan]Week of {summary.week_start:%B} {summary.week_start.day} - "
            f"{summary.week_end.day}, {summary.week_end.year}[/bold cyan]"
            f"  [magenta]{format_hours(summary.total_hours)} total[/magenta]\n"
        )

        table = Table()
        table.add_column("Day", style="cyan")
        table.add_column("Entries", style="bold")
        table.add_column("Hours", style="magenta", justify="right")

        for day_info in summary.days:
            label = f"{day_info.day:%A %b} {day_info.day.day}"
            if day_info.day == today:
                label += " (Today)"
            if day_info.entries:
                lines = []
                for entry in day_info.entries:
                    line = f"{entry.project}: {entry.description}"
                    time_range = format_time_range(entry)
                    if time_range:
                        line += f" ({time_range})"
                    lines.append(escape(line))
                details = "\n".join(lines)
            else:
                details = "[dim]No time logged[/dim]"
            table.add_row(label, details, format_hours(day_info.total_hours))

        self.console.print(table)
        self.console.print()

        summary_table = Table(title="Week Summary", show_header=False, box=None, padding=(0, 2))
        summary_table.add_column(style="dim")
        summary_table.add_column(style="bold")
        summary_table.add_row("Total Hours:", f"{summary.total_hours:.1f}")
        summary_table.add_row("Daily Average:", f"{summary.daily_average:.1f}")
        summary_table.add_row("Days Worked:", str(summary.days_worked))
        summary_table.add_row("Total Entries:", str(summary.total_entries))
        self.console.print(summary_table)

    def month_report(
        self, entries: Sequence[TimeEntry], day: date, today: Optional[date] = None
    ) -> None:
        """Print a Monday-first calendar of the month containing ``day``.

        Each day shows its total hours when anything was logged.
        """
        if today is None:
            today = datetime.now().date()
        totals = month_totals(entries, day)
        month_total = sum(totals.values())
        days_worked = sum(1 for hours in totals.values() if hours > 0)

        self.console.print(
            f"\n[bold cyan]{day:%B} {day.year}[/bold cyan]"
            f"  [magenta]{format_hours(month_total)} total[/magenta]\n"
        )

        table = Table(show_lines=True)
        for name in WEEKDAY_NAMES:
            table.add_column(name, justify="center", min_width=6)

        for week in calendar.Calendar(firstweekday=0).monthdayscalendar(day.year, day.month):
            cells = []
            for number in week:
                if number == 0:
                    cells.append("")
                    continue
                current = day.replace(day=number)
                cell = str(number)
                if current == today:
                    cell = f"[bold underline]{number}[/bold underline]"
                if totals[current] > 0:
                    cell += f"\n[magenta]{format_hours(totals[current])}[/magenta]"
                cells.append(cell)
            table.add_row(*cells)

        self.console.print(table)
        self.console.print(
            f"\n[bold]Total:[/bold] {format_hours(month_total)} over {days_worked} days"
        )

    def stats_report(self, entries: Sequence[TimeEntry], now: Optional[datetime] = None) -> None:
        """Print overview, top projects and the monthly comparison."""
        if not entries:
            self.console.print("[yellow]No data yet[/yellow]")
            self.console.print("Start logging your work hours to see statistics here.")
            return

        if now is None:
            now = datetime.now()
        stats = compute_stats(entries, now)

        self.console.print("\n[bold cyan]Overview[/bold cyan]\n")
        overview = Table(show_header=False, box=None, padding=(0, 2))
        overview.add_column(style="dim")
        overview.add_column(style="bold")
        overview.add_row(
            "Total Hours:",
            f"{format_hours(stats.total_hours)} across {stats.total_entries} entries",
        )
        overview.add_row(
            "This Month:",
            f"{format_hours(stats.current_month_hours)} "
            f"{self._trend(stats.monthly_change_percent)}",
        )
        overview.add_row(
            "Daily Average:", f"{format_hours(stats.daily_average)} over {stats.unique_days} days"
        )
        overview.add_row("Active Days:", str(stats.unique_days))
        self.console.print(overview)
        self.console.print()

        if stats.top_projects:
            projects_table = Table(title="Top Projects")
            projects_table.add_column("#", style="dim", justify="right")
            projects_table.add_column("Project", style="cyan")
            projects_table.add_column("Hours", style="magenta", justify="right")
            projects_table.add_column("% Total", style="green", justify="right")
            projects_table.add_column("Entries", justify="right")
            projects_table.add_column("Bar", style="blue")

            for rank, total in enumerate(stats.top_projects, start=1):
                pct = project_share(total.hours, stats.total_hours)
                projects_table.add_row(
                    str(rank),
                    escape(total.project),
                    format_hours(total.hours),
                    f"{pct:.1f}%",
                    str(total.entries),
                    self._create_bar(pct),
                )

            self.console.print(projects_table)
            self.console.print()

        comparison = Table(title="Monthly Comparison")
        comparison.add_column("Month", style="cyan")
        comparison.add_column("Hours", style="magenta", justify="right")
        comparison.add_row(now.strftime("%B %Y"), format_hours(stats.current_month_hours))
        last_month_start = previous_month_bounds(now.date())[0]
        comparison.add_row(f"{last_month_start:%B %Y}", format_hours(stats.last_month_hours))
        self.console.print(comparison)

    def _trend(self, percent: float) -> str:
        if percent >= 0:
            return f"[green]▲ {abs(percent):.1f}%[/green]"
        return f"[red]▼ {abs(percent):.1f}%[/red]"

    def _create_bar(self, percentage: float, width: int = 25) -> Text:
        """Create a visual bar for percentage display.

        Args:
            percentage: Percentage value (0-100)
            width: Width of the bar in characters

        Returns:
            Rich Text object with colored bar
        """
        filled = int((percentage / 100) * width)
        empty = width - filled

        bar = Text()
        bar.append("█" * filled, style="blue")
        bar.append("░" * empty, style="dim")

        return bar
