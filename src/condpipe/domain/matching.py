"""First-match-wins selection over an ordered entry sequence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from condpipe.domain.entry import Entry


@dataclass(frozen=True)
class Match:
    """The first entry whose condition held, and its position."""

    index: int
    entry: Entry[Any, Any]


def find_match(value: Any, entries: Sequence[Entry[Any, Any]]) -> Match | None:
    """Return the first entry whose condition holds for *value*.

    Conditions run in declared order and stop at the first truthy one;
    no action is evaluated here. A ``None`` value never matches and no
    condition is called for it. Errors raised by a condition propagate
    unchanged.
    """
    if value is None:
        return None
    for index, entry in enumerate(entries):
        if entry.condition(value):
            return Match(index=index, entry=entry)
    return None
