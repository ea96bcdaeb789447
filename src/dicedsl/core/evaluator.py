"""
Expression evaluator for dice expressions.

Rolls an expression against a ``RandomSource``. Every call resamples; the
expression itself is never modified.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from dicedsl.core.ir import DiceExpr, Shuffle, Throw, ThrowCompare

T = TypeVar("T")


class ExpressionEvalError(Exception):
    """Error during expression evaluation."""


class RandomSource(Protocol):
    """The randomness capability the evaluator needs."""

    def sample_uniform_int(self, low: int, high_inclusive: int) -> int:
        """Return an integer drawn uniformly from ``[low, high_inclusive]``."""
        ...

    def shuffle(self, sequence: Sequence[T]) -> list[T]:
        """Return a uniformly random permutation of ``sequence``."""
        ...


class SystemRandomSource:
    """``RandomSource`` backed by a private ``random.Random``.

    Args:
        seed: Optional seed for reproducible sessions. When set, identical
              calls produce identical draws across runs.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def sample_uniform_int(self, low: int, high_inclusive: int) -> int:
        return self._rng.randint(low, high_inclusive)

    def shuffle(self, sequence: Sequence[T]) -> list[T]:
        items = list(sequence)
        self._rng.shuffle(items)
        return items


class RollOutcome(BaseModel):
    """The result of evaluating one expression once."""

    expr: Throw | ThrowCompare | Shuffle
    draws: list[int] = Field(default_factory=list, description="Die draws, in draw order")
    passed: int | None = Field(default=None, description="Draws satisfying the comparison")
    order: list[str] = Field(default_factory=list, description="Permuted shuffle elements")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if isinstance(self.expr, Shuffle):
            return " ".join(self.order)
        draws = " ".join(str(d) for d in self.draws)
        if isinstance(self.expr, ThrowCompare):
            return (
                f"{draws} {self.expr.op.value} {self.expr.value}: "
                f"Pass {self.passed} of {self.expr.throw.times}"
            )
        return draws


def roll(expr: DiceExpr, source: RandomSource) -> RollOutcome:
    """Evaluate an expression once.

    Args:
        expr: Parsed expression.
        source: Randomness capability.

    Returns:
        Structured outcome; ``str(outcome)`` is the human-readable result.

    Raises:
        ExpressionEvalError: If ``expr`` is not a dice expression.
    """
    if isinstance(expr, Throw):
        return RollOutcome(expr=expr, draws=_draw(expr, source))

    if isinstance(expr, ThrowCompare):
        draws = _draw(expr.throw, source)
        passed = sum(1 for d in draws if expr.op.holds(d, expr.value))
        return RollOutcome(expr=expr, draws=draws, passed=passed)

    if isinstance(expr, Shuffle):
        return RollOutcome(expr=expr, order=source.shuffle(expr.elements))

    raise ExpressionEvalError(f"Unknown expression type: {type(expr).__name__}")


def evaluate(expr: DiceExpr, source: RandomSource) -> str:
    """Evaluate an expression once and render the result string."""
    return str(roll(expr, source))


def _draw(throw: Throw, source: RandomSource) -> list[int]:
    return [source.sample_uniform_int(1, throw.faces) for _ in range(throw.times)]
