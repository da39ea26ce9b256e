"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, condpipe.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False
