"""Exceptions raised by condpipe itself.

Errors raised by caller-supplied conditions, actions, mapping functions
and suppliers are never caught or wrapped; they reach the caller as-is.
"""

from __future__ import annotations


class ConditionalError(Exception):
    """Base class for errors raised by the library."""


class NullArgumentError(ConditionalError, TypeError):
    """A required callable was ``None`` where it was supplied."""


class SequencingError(ConditionalError, ValueError):
    """The incremental builder was used out of order."""


class ConfigError(ConditionalError):
    """A ``condpipe.toml`` file could not be read."""


def require(value: object, name: str) -> None:
    """Raise :class:`NullArgumentError` if *value* is ``None``."""
    if value is None:
        msg = f"{name} must not be None"
        raise NullArgumentError(msg)
