"""CLI commands for configuration management."""

import json
import shutil
import sys
from typing import Any

import click  # type: ignore[import-not-found]
from rich.markup import escape  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]

from work_scheduler.cli.common import console, error_console, get_config

SECRET_KEYS = {"sync.api_token"}


@click.group()  # type: ignore[misc]
def config() -> None:
    """Manage Work Scheduler configuration.

    Configuration is stored in ~/.work-scheduler/config.yml
    """
    pass


@config.command("show")  # type: ignore[misc]
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Show all configuration settings.

    The API token is masked.

    Example:
        work-scheduler config show
        work-scheduler config show --json
    """
    config_mgr = get_config(ctx)
    config_dict = config_mgr.to_dict()
    if config_dict.get("sync", {}).get("api_token"):
        config_dict["sync"]["api_token"] = "********"

    if as_json:
        print(json.dumps(config_dict, indent=2))
        return

    table = Table(title="Work Scheduler Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    def add_rows(prefix: str, data: dict[str, Any]) -> None:
        """Recursively add configuration rows."""
        for key, value in data.items():
            full_key = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                add_rows(full_key, value)
            else:
                table.add_row(full_key, escape(str(value)))

    add_rows("", config_dict)
    console.print(table)
    console.print(f"\nConfig file: {config_mgr.config_path}")


@config.command("get")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_get(ctx: click.Context, key: str) -> None:
    """Get a specific configuration value.

    Uses dot notation to access nested values.

    Example:
        work-scheduler config get api.port
        work-scheduler config get sync.base_url
    """
    value = get_config(ctx).get(key)

    if value is None:
        error_console.print(f"[red]Error:[/red] Configuration key '{escape(key)}' not found")
        sys.exit(1)

    if key in SECRET_KEYS:
        value = "********"

    if isinstance(value, dict):
        console.print(escape(json.dumps(value, indent=2)))
    else:
        console.print(escape(str(value)))


def _convert_value(value: str) -> Any:
    """Convert a command-line string to bool, None, int, float or str."""
    lowered = value.lower()
    if lowered in ("true", "yes"):
        return True
    if lowered in ("false", "no"):
        return False
    if lowered == "null":
        return None
    for number_type in (int, float):
        try:
            return number_type(value)
        except ValueError:
            continue
    return value


@config.command("set")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.argument("value")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value.

    Values are automatically converted to appropriate types.
    Use 'true'/'false' for booleans, numbers for integers.

    Example:
        work-scheduler config set api.port 8080
        work-scheduler config set advanced.log_level INFO
        work-scheduler config set sync.push_on_log false
    """
    converted_value = _convert_value(value)

    try:
        get_config(ctx).set(key, converted_value)
        console.print(f"[green]✓[/green] Set {escape(key)} = {escape(str(converted_value))}")
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)


@config.command("reset")  # type: ignore[misc]
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_reset(ctx: click.Context, yes: bool) -> None:
    """Reset configuration to defaults.

    This also forgets the Notion connection.

    Example:
        work-scheduler config reset --yes
    """
    config_mgr = get_config(ctx)

    if not yes:
        console.print("[yellow]Warning:[/yellow] This will reset all configuration to defaults.")
        if not click.confirm("Continue?"):
            console.print("Cancelled")
            return

    backup_path = config_mgr.config_path.with_suffix(".yml.backup")
    if config_mgr.config_path.exists():
        shutil.copy(config_mgr.config_path, backup_path)
        console.print(f"Backed up current config to {backup_path}")

    config_mgr.reset()
    console.print("[green]✓[/green] Configuration reset to defaults")
    console.print(f"Config file: {config_mgr.config_path}")


@config.command("path")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_path(ctx: click.Context) -> None:
    """Show path to configuration file."""
    console.print(str(get_config(ctx).config_path))
