"""
Typed dice expression IR.

Three expression kinds exist:
- Throw: roll one die ``times`` times (``3D6``)
- ThrowCompare: roll, then count draws passing a comparison (``3D6>4``)
- Shuffle: permute a list of named items (``S A B C``)

``str()`` of every node gives its canonical surface syntax, which parses
back to an equal node.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class CompareOp(StrEnum):
    """Comparison operators, valued by their canonical display symbol."""

    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    EQ = "="
    NE = "!="

    @property
    def predicate(self) -> Callable[[int, int], bool]:
        """Binary predicate applied as ``predicate(draw, value)``."""
        return _PREDICATES[self]

    def holds(self, left: int, right: int) -> bool:
        return self.predicate(left, right)


_PREDICATES: dict[CompareOp, Callable[[int, int], bool]] = {
    CompareOp.GT: operator.gt,
    CompareOp.GE: operator.ge,
    CompareOp.LT: operator.lt,
    CompareOp.LE: operator.le,
    CompareOp.EQ: operator.eq,
    CompareOp.NE: operator.ne,
}

# Every accepted spelling, including the non-canonical ones.
SYMBOL_ALIASES: dict[str, CompareOp] = {
    "<>": CompareOp.NE,
    "!=": CompareOp.NE,
    "=": CompareOp.EQ,
    "==": CompareOp.EQ,
    "===": CompareOp.EQ,
    ">": CompareOp.GT,
    ">=": CompareOp.GE,
    "<": CompareOp.LT,
    "<=": CompareOp.LE,
}


# ---------------------------------------------------------------------------
# Expression nodes
# ---------------------------------------------------------------------------


class Throw(BaseModel):
    """Throw a die with ``faces`` faces ``times`` times."""

    faces: int = Field(ge=1, description="Number of faces on the die")
    times: int = Field(ge=0, description="Number of draws")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.times}D{self.faces}"


class ThrowCompare(BaseModel):
    """A throw whose draws are each compared against ``value``."""

    throw: Throw
    op: CompareOp
    value: int = Field(description="Threshold every draw is compared with")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.throw}{self.op.value}{self.value}"


class Shuffle(BaseModel):
    """Shuffle a list of named elements."""

    elements: tuple[str, ...] = Field(default=(), description="Item names, in input order")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return " ".join(("S", *self.elements))


DiceExpr = Throw | ThrowCompare | Shuffle
