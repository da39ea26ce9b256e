"""Pipeline — an ordered, immutable chain of condition/action entries.

A pipeline is bound to one input value. Entries are added with the batch
form (:meth:`Pipeline.first_matching`), one call per entry
(:meth:`Pipeline.map_when`), or the staged form
(:meth:`Pipeline.apply` then :meth:`Pipeline.when`). A terminal call
(:meth:`Pipeline.or_else`, :meth:`Pipeline.or_else_get`,
:meth:`Pipeline.or_else_throw`) runs the action of the first entry whose
condition holds, or the fallback when none does.

Usage::

    result = (
        Pipeline.of(n)
        .map_when(lambda x: x * 2, is_even)
        .or_map_when(lambda x: x / 2, lambda x: x > 100)
        .or_else(0.0)
    )

INVARIANT: Entries are evaluated in exactly the order they were declared.
Every method returns a new Pipeline; the receiver is never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, NoReturn, TypeVar

from pydantic import BaseModel

from condpipe.domain.entry import Entry
from condpipe.domain.lifecycle import (
    RESOLUTION_TRANSITIONS,
    ResolutionState,
    is_valid_transition,
)
from condpipe.domain.matching import find_match
from condpipe.errors import SequencingError, require

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")


def _advance(op: str, current: ResolutionState, target: ResolutionState) -> ResolutionState:
    if not is_valid_transition(current, target, RESOLUTION_TRANSITIONS):
        msg = f"Invalid resolution transition {current} -> {target}"
        raise RuntimeError(msg)
    logger.debug("%s: %s -> %s", op, current, target)
    return target


class Pipeline(BaseModel, Generic[S, T]):
    """Ordered condition/action entries plus the value they are matched against.

    Attributes:
        value: The bound input. ``None`` means absent; an absent value never
            matches and always takes the fallback.
        entries: Condition/action pairs in declaration order.
        pending: Action staged by :meth:`apply` / :meth:`or_apply` that is
            still waiting for its :meth:`when` condition.
    """

    model_config = {"frozen": True}

    value: Any = None
    entries: tuple[Entry, ...] = ()
    pending: Callable[[Any], Any] | None = None

    # --- Construction ---

    @classmethod
    def of(cls, value: S | None) -> Pipeline[S, S]:
        """Bind *value* to a new pipeline with no entries."""
        return cls(value=value)

    @classmethod
    def empty(cls) -> Pipeline[Any, Any]:
        """A pipeline with no entries and no bound value."""
        return cls()

    def first_matching(self, *entries: Entry[S, U]) -> Pipeline[S, U]:
        """Append *entries* in argument order."""
        self._require_settled("first_matching")
        for entry in entries:
            require(entry, "entry")
            if not isinstance(entry, Entry):
                msg = f"first_matching() expects Entry values, got {type(entry).__name__}"
                raise TypeError(msg)
        return self._with_entries(*entries)

    def map_when(self, action: Callable[[S], U], condition: Callable[[S], Any]) -> Pipeline[S, U]:
        """Append one entry running *action* when *condition* holds."""
        self._require_settled("map_when")
        return self._with_entries(Entry(condition, action))

    def or_map_when(
        self, action: Callable[[S], T], condition: Callable[[S], Any]
    ) -> Pipeline[S, T]:
        """Append an alternative entry after at least one :meth:`map_when`."""
        self._require_settled("or_map_when")
        if not self.entries:
            msg = (
                "or_map_when() cannot be the first entry after Pipeline.of(); "
                "start with map_when() instead"
            )
            raise SequencingError(msg)
        return self._with_entries(Entry(condition, action))

    # --- Staged builder ---

    def apply(self, action: Callable[[S], U]) -> Pipeline[S, U]:
        """Stage *action*; the next call must be :meth:`when`."""
        return self._stage("apply", action)

    def or_apply(self, action: Callable[[S], T]) -> Pipeline[S, T]:
        """Stage the next alternative *action*; the next call must be :meth:`when`."""
        return self._stage("or_apply", action)

    def when(self, condition: Callable[[S], Any]) -> Pipeline[S, T]:
        """Pair the staged action with *condition* and append it."""
        if self.pending is None:
            msg = (
                "when() requires a pending action: call apply() or or_apply() "
                "before attaching a condition"
            )
            raise SequencingError(msg)
        require(condition, "condition")
        return self.model_copy(
            update={
                "entries": (*self.entries, Entry(condition, self.pending)),
                "pending": None,
            }
        )

    def apply_to(self, value: S | None) -> Pipeline[S, T]:
        """Rebind these entries to *value* so a rule set can be reused."""
        return self.model_copy(update={"value": value})

    # --- Transformation ---

    def map(self, mapper: Callable[[T], U]) -> Pipeline[S, U]:
        """Post-compose every action with *mapper*. Nothing is evaluated."""
        require(mapper, "mapper")
        self._require_settled("map")
        entries = tuple(entry.and_then(mapper) for entry in self.entries)
        return self.model_copy(update={"entries": entries})

    def flat_map(self, mapper: Callable[[T], Pipeline[T, U]]) -> Pipeline[T, U]:
        """Resolve now and continue with the pipeline *mapper* builds from the result.

        Unlike :meth:`map` this is eager: the current pipeline is matched
        against its bound value immediately. When an entry matches, its
        action runs and *mapper* receives the result; the pipeline *mapper*
        returns is returned as-is. When nothing matches (or the value is
        absent) *mapper* is not called and :meth:`empty` is returned, so any
        terminal call on the result takes its fallback.
        """
        require(mapper, "mapper")
        self._require_settled("flat_map")
        inner = self.map(mapper)._resolve("flat_map", Pipeline.empty)
        if not isinstance(inner, Pipeline):
            msg = f"flat_map() mapper must return a Pipeline, got {type(inner).__name__}"
            raise TypeError(msg)
        return inner

    # --- Terminal operations ---

    def or_else(self, default: T | None) -> T | None:
        """Result of the first matching action, or *default* as given."""
        return self._resolve("or_else", lambda: default)

    def or_else_get(self, supplier: Callable[[], T]) -> T:
        """Result of the first matching action, or ``supplier()``."""
        require(supplier, "supplier")
        return self._resolve("or_else_get", supplier)

    def or_else_throw(self, error_supplier: Callable[[], BaseException]) -> T:
        """Result of the first matching action, or raise ``error_supplier()``.

        *error_supplier* may be an exception class or any zero-argument
        callable returning an exception instance.
        """
        require(error_supplier, "error_supplier")

        def fail() -> NoReturn:
            raise error_supplier()

        return self._resolve("or_else_throw", fail)

    # --- Internal helpers ---

    def _resolve(self, op: str, fallback: Callable[[], Any]) -> Any:
        self._require_settled(op)
        state = _advance(op, ResolutionState.UNRESOLVED, ResolutionState.MATCHING)
        match = find_match(self.value, self.entries)
        if match is None:
            state = _advance(op, state, ResolutionState.UNMATCHED)
            logger.debug("%s: none of %d entries matched", op, len(self.entries))
            _advance(op, state, ResolutionState.FALLBACK)
            return fallback()
        state = _advance(op, state, ResolutionState.MATCHED)
        logger.debug("%s: entry %d of %d matched", op, match.index, len(self.entries))
        _advance(op, state, ResolutionState.APPLIED)
        return match.entry.action(self.value)

    def _with_entries(self, *entries: Entry[Any, Any]) -> Pipeline[Any, Any]:
        return self.model_copy(update={"entries": (*self.entries, *entries)})

    def _stage(self, op: str, action: Callable[[Any], Any]) -> Pipeline[Any, Any]:
        if self.pending is not None:
            msg = f"{op}() called while a previous action is still pending; call when() first"
            raise SequencingError(msg)
        require(action, "action")
        return self.model_copy(update={"pending": action})

    def _require_settled(self, op: str) -> None:
        if self.pending is not None:
            msg = (
                f"{op}() called with an action from apply()/or_apply() that has "
                "no condition; call when() first"
            )
            raise SequencingError(msg)


def apply(action: Callable[[S], T]) -> Pipeline[S, T]:
    """Start an unbound rule set with a staged *action*.

    Bind it to an input later with :meth:`Pipeline.apply_to`::

        rules = apply(double).when(is_even).or_apply(halve).when(is_big)
        rules.apply_to(4).or_else(0)
    """
    return Pipeline.empty().apply(action)
