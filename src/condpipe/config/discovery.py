"""Config file discovery and reading.

Walk-up finder locates the nearest ``condpipe.toml``, or a
``pyproject.toml`` carrying a ``[tool.condpipe]`` table, similar to how
git finds .git/. The CONDPIPE_CONFIG env var overrides the walk.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from condpipe.errors import ConfigError

CONFIG_FILENAME = "condpipe.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "CONDPIPE_CONFIG"
TOOL_NAME = "condpipe"


def _parents(start: Path | None) -> Iterator[Path]:
    current = (start or Path.cwd()).resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for condpipe config.

    In each directory ``condpipe.toml`` wins over ``pyproject.toml``; a
    pyproject without a ``tool.condpipe`` table is skipped. Returns None
    if nothing is found. Checks CONDPIPE_CONFIG env var first. A pyproject
    that is not valid TOML raises :class:`ConfigError`.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    for directory in _parents(start):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _tool_table(_load_toml(pyproject)) is not None:
            return pyproject
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* into a settings dict.

    For ``pyproject.toml`` only the ``[tool.condpipe]`` table is returned.
    Raises :class:`ConfigError` on invalid TOML.
    """
    data = _load_toml(path)
    if path.name == PYPROJECT_FILENAME:
        return _tool_table(data) or {}
    return data


def _load_toml(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc


def _tool_table(data: dict[str, Any]) -> dict[str, Any] | None:
    tool = data.get("tool")
    if not isinstance(tool, dict):
        return None
    table = tool.get(TOOL_NAME)
    return table if isinstance(table, dict) else None
