"""La Borsa backend package wiring and entrypoints."""

from borsa_backend.main import configure_logging, run_dev, run_prod
from borsa_backend.settings import BackendSettings, get_settings, settings

main = run_dev

__all__ = [
    "BackendSettings",
    "configure_logging",
    "get_settings",
    "main",
    "run_dev",
    "run_prod",
    "settings",
]
