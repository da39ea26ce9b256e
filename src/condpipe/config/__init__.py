"""Opt-in configuration: settings discovery and structlog setup."""

from __future__ import annotations

from condpipe.config.logging import configure_logging
from condpipe.config.settings import CondpipeSettings


def setup(settings: CondpipeSettings | None = None) -> CondpipeSettings:
    """Load settings (unless given) and configure logging from them."""
    if settings is None:
        settings = CondpipeSettings.load()
    configure_logging(
        verbose=settings.logging.verbose,
        log_json=settings.logging.log_json,
    )
    return settings


__all__ = ["CondpipeSettings", "configure_logging", "setup"]
