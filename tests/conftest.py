"""Shared pytest fixtures for dicedsl tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import pytest

T = TypeVar("T")


class ScriptedRandomSource:
    """RandomSource that replays fixed draws and reverses on shuffle."""

    def __init__(self, draws: Sequence[int] = ()) -> None:
        self._draws = list(draws)
        self.calls: list[tuple[int, int]] = []

    def sample_uniform_int(self, low: int, high_inclusive: int) -> int:
        self.calls.append((low, high_inclusive))
        return self._draws.pop(0)

    def shuffle(self, sequence: Sequence[T]) -> list[T]:
        return list(reversed(sequence))


@pytest.fixture
def scripted():
    """Return a factory for ScriptedRandomSource."""
    return ScriptedRandomSource
