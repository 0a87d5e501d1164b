"""FastAPI application server.

This module contains the FastAPI application setup and server runner. The
API relays entries to and from Notion and computes statistics for the
front-end.
"""

from typing import Optional

from fastapi import FastAPI  # type: ignore[import-untyped]
from fastapi.responses import JSONResponse  # type: ignore[import-untyped]

from work_scheduler import __version__
from work_scheduler.api.middleware import setup_middleware
from work_scheduler.core.config import ConfigManager
from work_scheduler.sync.relay import SyncRelay


def create_app(
    config: Optional[ConfigManager] = None, relay: Optional[SyncRelay] = None
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: Optional configuration manager (creates default if None)
        relay: Optional relay; by default one is built per request from config

    Returns:
        Configured FastAPI application instance

    Example:
        >>> app = create_app()
        >>> # Or with a fake backend for testing
        >>> app = create_app(config, SyncRelay(lambda token: FakeBackend()))
    """
    if config is None:
        config = ConfigManager()

    app = FastAPI(
        title="Work Scheduler API",
        description="Notion sync relay and statistics for Work Scheduler",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.state.config = config
    app.state.relay = relay

    setup_middleware(app, config)

    from work_scheduler.api.endpoints import connection, entries, stats, system

    app.include_router(system.router, prefix="/api", tags=["system"])
    app.include_router(connection.router, prefix="/api/connection", tags=["connection"])
    app.include_router(entries.router, prefix="/api/entries", tags=["entries"])
    app.include_router(stats.router, prefix="/api/stats", tags=["stats"])

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Root endpoint with pointers to docs and health."""
        return JSONResponse(
            {
                "message": "Work Scheduler API",
                "version": __version__,
                "docs": "/docs",
                "health": "/api/health",
            }
        )

    return app


def run_server(
    host: str = "localhost",
    port: int = 3001,
    reload: bool = False,
    workers: int = 1,
    config: Optional[ConfigManager] = None,
) -> None:
    """Run the API server using Uvicorn.

    Args:
        host: Host address to bind to
        port: Port number to bind to
        reload: Enable auto-reload for development
        workers: Number of worker processes
        config: Optional configuration manager

    Note:
        This function blocks until the server is stopped.
    """
    import uvicorn  # type: ignore[import-untyped]

    if config is None:
        config = ConfigManager()

    uvicorn_config = {
        "host": host,
        "port": port,
        "log_level": config.get("api.advanced.log_level", "info"),
        "access_log": config.get("api.advanced.access_log", True),
    }

    if reload or workers > 1:
        # Reload and multiple workers need an import string; the app is
        # rebuilt from the default config file in each process.
        uvicorn.run(
            "work_scheduler.api.server:create_app",
            factory=True,
            reload=reload,
            workers=workers if not reload else 1,  # reload only works with 1 worker
            **uvicorn_config,
        )
    else:
        uvicorn.run(create_app(config), **uvicorn_config)
