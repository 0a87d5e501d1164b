"""Helpers shared by the CLI command modules."""

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from work_scheduler.core.config import ConfigManager
from work_scheduler.core.storage import StorageManager
from work_scheduler.sync.client import client_factory_from_config
from work_scheduler.sync.relay import SyncRelay

console = Console()
error_console = Console(stderr=True)


def get_config(ctx: click.Context) -> ConfigManager:
    """Configuration for this invocation, loaded once per context."""
    obj = ctx.ensure_object(dict)
    if obj.get("config") is None:
        config_path = obj.get("config_path")
        obj["config"] = ConfigManager(Path(config_path) if config_path else None)
    config: ConfigManager = obj["config"]
    return config


def get_storage(ctx: click.Context) -> StorageManager:
    """Entry storage, honouring ``--data-dir`` before the configured data_dir."""
    obj = ctx.ensure_object(dict)
    data_dir = obj.get("data_dir")
    if data_dir is None:
        data_dir = get_config(ctx).get("general.data_dir", "~/.work-scheduler/data")
    return StorageManager(Path(data_dir).expanduser())


def get_relay(ctx: click.Context) -> SyncRelay:
    """Sync relay using the Notion client settings from config."""
    obj = ctx.ensure_object(dict)
    if obj.get("relay") is None:
        obj["relay"] = SyncRelay(client_factory_from_config(get_config(ctx)))
    relay: SyncRelay = obj["relay"]
    return relay


def parse_day(value: Optional[str]) -> date:
    """Parse 'today', 'yesterday' or YYYY-MM-DD into a date.

    Raises:
        click.BadParameter: If the value cannot be parsed
    """
    today = datetime.now().date()
    if not value or value.lower() == "today":
        return today
    if value.lower() == "yesterday":
        return today - timedelta(days=1)
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(
            f"Invalid date '{value}'. Use YYYY-MM-DD, 'today', or 'yesterday'"
        )
