"""La Borsa API entrypoint."""

from __future__ import annotations

import logging

import uvicorn

from borsa_backend.api import create_api
from borsa_backend.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

app = create_api()


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger for the service."""
    resolved = level or get_settings().log_level
    logging.basicConfig(level=resolved.upper(), format=LOG_FORMAT)


def _run_uvicorn(*, reload: bool) -> None:
    """Start uvicorn with a consistent configuration."""
    config = get_settings()
    configure_logging(config.log_level)
    uvicorn.run(
        "borsa_backend.main:app",
        host=config.api_host,
        port=config.api_port,
        reload=reload,
        log_level=config.log_level.lower(),
    )


def run_dev() -> None:
    """Run the development ASGI server with auto-reload."""
    _run_uvicorn(reload=True)


def run_prod() -> None:
    """Run the production ASGI server without auto-reload."""
    _run_uvicorn(reload=False)
