"""Resolution states for a single terminal call.

Every ``or_else*`` call walks this machine once:

    unresolved -> matching -> matched -> applied
                           -> unmatched -> fallback

``applied`` and ``fallback`` are terminal. There are no retries.
"""

from __future__ import annotations

from enum import StrEnum


class ResolutionState(StrEnum):
    """Where a terminal call is in its evaluation."""

    UNRESOLVED = "unresolved"
    MATCHING = "matching"
    MATCHED = "matched"
    UNMATCHED = "unmatched"
    APPLIED = "applied"
    FALLBACK = "fallback"


RESOLUTION_TRANSITIONS: dict[str, list[str]] = {
    "unresolved": ["matching"],
    "matching": ["matched", "unmatched"],
    "matched": ["applied"],
    "unmatched": ["fallback"],
    "applied": [],
    "fallback": [],
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]],
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed


def is_terminal(state: str) -> bool:
    """True once no further transition is possible."""
    return not RESOLUTION_TRANSITIONS.get(state, [])
