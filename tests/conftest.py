"""Shared pytest fixtures and test helpers for condpipe tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from condpipe import Pipeline


class Recorder:
    """Wraps callables so tests can assert which ones ran, and in what order."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def condition(self, name: str, result: bool) -> Callable[[Any], bool]:
        def check(value: Any) -> bool:
            self.calls.append(name)
            return result

        return check

    def action(self, name: str, fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
        def run(value: Any) -> Any:
            self.calls.append(name)
            return fn(value)

        return run


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def is_even(n: int) -> bool:
    return n % 2 == 0


def times_two(n: int) -> int:
    return n * 2


def halve(n: int) -> float:
    return n / 2


def over_hundred(n: int) -> bool:
    return n > 100


def plus(amount: int) -> Callable[[int], int]:
    return lambda n: n + amount


def always(_: Any) -> bool:
    return True


def never(_: Any) -> bool:
    return False


def doubles_when_even(value: int | None) -> Pipeline[int, int]:
    """Single entry: double the value when it is even."""
    return Pipeline.of(value).map_when(times_two, is_even)


def several_true(value: int | None) -> Pipeline[int, int]:
    """Six entries; the third, fourth and fifth conditions all hold."""
    return (
        Pipeline.of(value)
        .map_when(plus(1), never)
        .or_map_when(plus(2), never)
        .or_map_when(plus(3), always)
        .or_map_when(plus(4), always)
        .or_map_when(plus(5), always)
        .or_map_when(plus(6), never)
    )


def all_false(value: int | None) -> Pipeline[int, int]:
    return (
        Pipeline.of(value)
        .map_when(plus(1), never)
        .or_map_when(plus(2), never)
        .or_map_when(plus(3), never)
    )
