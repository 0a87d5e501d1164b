"""Main CLI application."""

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape

from work_scheduler import __version__
from work_scheduler.analysis.reports import ReportGenerator
from work_scheduler.cli.common import (
    console,
    error_console,
    get_config,
    get_relay,
    get_storage,
    parse_day,
)
from work_scheduler.core.logs import setup_logging
from work_scheduler.core.models import TimeEntry
from work_scheduler.sync.errors import SyncError


@click.group()
@click.version_option(version=__version__)
@click.option("--data-dir", help="Custom data directory", type=click.Path())
@click.option("--config", "config_path", help="Path to config file", type=click.Path())
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override advanced.log_level",
)
@click.option("--log-file", type=click.Path(), help="Override advanced.log_file")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: Optional[str],
    config_path: Optional[str],
    log_level: Optional[str],
    log_file: Optional[str],
    no_color: bool,
) -> None:
    """Work Scheduler - log work hours and sync them to Notion.

    Log entries, review them by day, week or month, see statistics, and push
    them to a Notion database.
    """
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir
    ctx.obj["config_path"] = config_path

    try:
        config = get_config(ctx)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    log_file = log_file or config.get("advanced.log_file")
    setup_logging(
        log_level or config.get("advanced.log_level", "WARNING"),
        str(Path(log_file).expanduser()) if log_file else None,
    )

    if no_color:
        console.no_color = True


@cli.command("log")
@click.argument("project")
@click.argument("description")
@click.option("--hours", type=float, required=True, help="Hours worked (0-24)")
@click.option("-d", "--date", "date_str", help="Date (YYYY-MM-DD, 'today', 'yesterday')")
@click.option("--start", help="Start time, e.g. 09:00")
@click.option("--end", help="End time, e.g. 17:00")
@click.option("--no-sync", is_flag=True, help="Do not push this entry to Notion")
@click.pass_context
def log_entry(
    ctx: click.Context,
    project: str,
    description: str,
    hours: float,
    date_str: Optional[str],
    start: Optional[str],
    end: Optional[str],
    no_sync: bool,
) -> None:
    """Log a time entry.

    When a Notion database is connected the entry is pushed there too. A
    failed push keeps the local entry.

    Example:
        work-scheduler log "Acme" "Code review" --hours 2.5
        work-scheduler log "Acme" "Standup" --hours 0.25 -d 2025-11-14 --start 09:00 --end 09:15
    """
    day = parse_day(date_str)

    try:
        entry = TimeEntry.create(
            project, description, datetime.combine(day, datetime.min.time()), hours, start, end
        )
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    get_storage(ctx).save_entry(entry)
    console.print(f"[green]✓[/green] Logged {entry.hours:g}h on {escape(entry.project)}")
    console.print(f"  Date: {day.isoformat()}")
    console.print(f"  ID: {escape(entry.id)}")

    config = get_config(ctx)
    sync_config = config.get_sync_config()
    if no_sync or sync_config is None or not config.get("sync.push_on_log", True):
        return

    try:
        result = get_relay(ctx).push_entry(entry, sync_config)
    except SyncError as e:
        console.print(
            f"[yellow]⚠[/yellow]  Saved locally, but Notion sync failed: {escape(e.message)}"
        )
        return
    console.print(f"[green]✓[/green] Synced to Notion ({escape(result.record_id)})")


@cli.command("list")
@click.option("-n", "--count", default=20, help="Number of entries to show")
@click.option("-d", "--date", "date_str", help="Filter by date (YYYY-MM-DD, 'today', 'yesterday')")
@click.option("-p", "--project", help="Filter by project")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_entries(
    ctx: click.Context,
    count: int,
    date_str: Optional[str],
    project: Optional[str],
    as_json: bool,
) -> None:
    """List logged entries, newest date first.

    Example:
        work-scheduler list
        work-scheduler list -d today
        work-scheduler list -p Acme --json
    """
    entries = get_storage(ctx).load_entries()

    if date_str:
        day = parse_day(date_str)
        entries = [e for e in entries if e.day == day]
    if project:
        entries = [e for e in entries if e.project == project]

    entries.sort(key=lambda e: e.date or datetime.min, reverse=True)
    entries = entries[:count]

    if not entries:
        console.print("[yellow]No entries found[/yellow]")
        return

    if as_json:
        print(json.dumps([entry.to_dict() for entry in entries], indent=2))
        return

    ReportGenerator(console).entries_table(entries, f"Time Entries (showing {len(entries)})")


@cli.command()
@click.argument("date_str", required=False)
@click.pass_context
def day(ctx: click.Context, date_str: Optional[str]) -> None:
    """Show entries and total hours for one day (default: today).

    Example:
        work-scheduler day
        work-scheduler day 2025-11-14
    """
    entries = get_storage(ctx).load_entries()
    ReportGenerator(console).day_report(entries, parse_day(date_str))


@cli.command()
@click.argument("date_str", required=False)
@click.pass_context
def week(ctx: click.Context, date_str: Optional[str]) -> None:
    """Show the Monday-to-Sunday week containing a date (default: today).

    Example:
        work-scheduler week
        work-scheduler week 2025-11-14
    """
    entries = get_storage(ctx).load_entries()
    ReportGenerator(console).week_report(entries, parse_day(date_str))


@cli.command()
@click.argument("date_str", required=False)
@click.pass_context
def month(ctx: click.Context, date_str: Optional[str]) -> None:
    """Show a calendar of the month containing a date with hours per day.

    Example:
        work-scheduler month
        work-scheduler month 2025-11-01
    """
    entries = get_storage(ctx).load_entries()
    ReportGenerator(console).month_report(entries, parse_day(date_str))


@cli.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show statistics: totals, top projects and monthly comparison.

    Example:
        work-scheduler stats
    """
    entries = get_storage(ctx).load_entries()
    ReportGenerator(console).stats_report(entries)


@cli.command()
@click.option("--host", default=None, help="Host address (default: from config)")
@click.option("--port", type=int, default=None, help="Port number (default: from config)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the API server.

    Examples:
        work-scheduler serve
        work-scheduler serve --host 0.0.0.0 --port 8080
        work-scheduler serve --reload  # Development mode
    """
    from work_scheduler.api.server import run_server

    config = get_config(ctx)
    final_host = host or config.get("api.host", "localhost")
    final_port = port or config.get("api.port", 3001)

    console.print("🚀 Starting Work Scheduler API server...")
    console.print(f"   URL: http://{final_host}:{final_port}/api")
    console.print(f"   Docs: http://{final_host}:{final_port}/docs")
    if reload:
        console.print("   Mode: Development (auto-reload enabled)")

    try:
        run_server(
            host=final_host,
            port=final_port,
            reload=reload,
            workers=config.get("api.workers", 1),
            config=config,
        )
    except KeyboardInterrupt:
        console.print("\n👋 Shutting down API server...")


def _register_commands() -> None:
    from work_scheduler.cli.config_commands import config
    from work_scheduler.cli.sync_commands import sync

    cli.add_command(config)
    cli.add_command(sync)


_register_commands()


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
