"""Dependency injection for FastAPI endpoints.

These dependencies hand endpoints the configuration and a SyncRelay wired to
the configured Notion client.
"""

from fastapi import Request  # type: ignore[import-untyped]

from work_scheduler.core.config import ConfigManager
from work_scheduler.sync.client import client_factory_from_config
from work_scheduler.sync.relay import SyncRelay


def get_config(request: Request = None) -> ConfigManager:  # type: ignore[assignment,misc]
    """Get configuration manager instance.

    Args:
        request: FastAPI Request object (when used as dependency)

    Returns:
        ConfigManager instance from app state or new instance
    """
    if request is not None and hasattr(request, "app"):
        if hasattr(request.app.state, "config"):
            config: ConfigManager = request.app.state.config
            return config
    return ConfigManager()


def get_relay(request: Request = None) -> SyncRelay:  # type: ignore[assignment,misc]
    """Get the sync relay.

    A relay stored on ``app.state.relay`` wins; otherwise one is built from
    the ``sync`` section of the configuration.
    """
    if request is not None and hasattr(request, "app"):
        relay = getattr(request.app.state, "relay", None)
        if relay is not None:
            return relay
    return SyncRelay(client_factory_from_config(get_config(request)))
