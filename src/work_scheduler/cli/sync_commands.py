"""CLI commands for Notion synchronization."""

import sys

import click
from rich.markup import escape
from rich.table import Table

from work_scheduler.analysis.reports import ReportGenerator
from work_scheduler.cli.common import console, error_console, get_config, get_relay, get_storage
from work_scheduler.core.models import SyncConfig
from work_scheduler.sync.errors import MissingConfig, SchemaMismatch, SyncError


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:4]}…{secret[-4:]}"


@click.group()
def sync() -> None:
    """Connect to a Notion database and push or pull entries."""
    pass


@sync.command()
@click.option("--token", prompt="Notion API token", hide_input=True, help="Integration token")
@click.option("--database", "database_id", prompt="Database ID", help="Notion database ID")
@click.pass_context
def connect(ctx: click.Context, token: str, database_id: str) -> None:
    """Check credentials against Notion and store them.

    The database needs Project (title), Description (text), Date (date) and
    Hours (number) properties. Start Time and End Time (text) are optional.

    Example:
        work-scheduler sync connect --database 1a2b3c...
    """
    try:
        result = get_relay(ctx).validate_connection(token.strip(), database_id.strip())
    except SchemaMismatch as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        error_console.print("Add the missing properties to the database and try again.")
        sys.exit(1)
    except SyncError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        sys.exit(1)

    get_config(ctx).save_sync_config(SyncConfig(token.strip(), database_id.strip()))

    console.print(
        f"[green]✓[/green] Connected to Notion database: [bold]{escape(result.title)}[/bold]"
    )
    console.print(f"  Properties: {escape(', '.join(result.fields))}")


@sync.command()
@click.pass_context
def disconnect(ctx: click.Context) -> None:
    """Forget the stored Notion credentials."""
    get_config(ctx).clear_sync_config()
    console.print("[green]✓[/green] Disconnected from Notion")


@sync.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show whether a Notion database is connected."""
    sync_config = get_config(ctx).get_sync_config()
    if sync_config is None:
        console.print("[yellow]Not connected to Notion[/yellow]")
        console.print("\nConnect with: [cyan]work-scheduler sync connect[/cyan]")
        return

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(style="bold")
    table.add_row("Database ID:", escape(sync_config.database_id))
    table.add_row("API token:", _mask(sync_config.api_token))
    console.print(table)


@sync.command()
@click.argument("entry_id")
@click.pass_context
def push(ctx: click.Context, entry_id: str) -> None:
    """Push one logged entry to Notion.

    Example:
        work-scheduler sync push 3f2a...
    """
    entry = get_storage(ctx).get_entry(entry_id)
    if entry is None:
        error_console.print(f"[red]Error:[/red] Entry '{escape(entry_id)}' not found")
        sys.exit(1)

    try:
        result = get_relay(ctx).push_entry(entry, get_config(ctx).get_sync_config())
    except MissingConfig as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        error_console.print("Connect first with: [cyan]work-scheduler sync connect[/cyan]")
        sys.exit(1)
    except SyncError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        sys.exit(1)

    console.print(f"[green]✓[/green] Pushed entry to Notion ({escape(result.record_id)})")


@sync.command()
@click.option("--replace", is_flag=True, help="Replace the local entries with the pulled ones")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def pull(ctx: click.Context, replace: bool, yes: bool) -> None:
    """Fetch all entries from Notion, newest date first.

    Without --replace the entries are only displayed.

    Example:
        work-scheduler sync pull
        work-scheduler sync pull --replace -y
    """
    try:
        entries = get_relay(ctx).pull_entries(get_config(ctx).get_sync_config())
    except SyncError as e:
        error_console.print(f"[red]Error:[/red] {escape(e.message)}")
        sys.exit(1)

    if not replace:
        if not entries:
            console.print("[yellow]No entries in the Notion database[/yellow]")
            return
        ReportGenerator(console).entries_table(entries, f"Notion Entries ({len(entries)})")
        return

    if not yes:
        console.print(
            f"[yellow]Warning:[/yellow] This replaces all local entries with "
            f"{len(entries)} entries from Notion."
        )
        if not click.confirm("Continue?"):
            console.print("Cancelled")
            return

    count = get_storage(ctx).replace_entries(entries)
    console.print(f"[green]✓[/green] Replaced local entries with {count} entries from Notion")
