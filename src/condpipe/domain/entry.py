"""Entry — one immutable condition/action pair.

INVARIANT: An Entry never exists with either field absent. Presence is
checked at construction, not when the entry is first evaluated.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from condpipe.errors import require

S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")


class Entry(BaseModel, Generic[S, T]):
    """A predicate over the input paired with the action to run when it holds.

    Entries compare and hash by their fields, so two entries built from the
    same callables are interchangeable.

    Attributes:
        condition: Predicate evaluated against the bound value.
        action: Function applied to the bound value when *condition* holds.
    """

    model_config = {"frozen": True}

    condition: Callable[[S], Any]
    action: Callable[[S], T]

    def __init__(self, condition: Callable[[S], Any], action: Callable[[S], T]) -> None:
        require(condition, "condition")
        require(action, "action")
        super().__init__(condition=condition, action=action)

    def and_then(self, mapper: Callable[[T], U]) -> Entry[S, U]:
        """Return an entry with the same condition and ``mapper(action(x))`` as action."""
        require(mapper, "mapper")
        action = self.action

        def composed(value: S) -> U:
            return mapper(action(value))

        return Entry(self.condition, composed)


def apply_if(condition: Callable[[S], Any], action: Callable[[S], T]) -> Entry[S, T]:
    """Build a reusable :class:`Entry` for :meth:`Pipeline.first_matching`."""
    return Entry(condition, action)
