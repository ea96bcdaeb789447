"""
dicedsl - a tiny dice expression language.

Usage:
    from dicedsl import parse_expr, evaluate, SystemRandomSource

    expr = parse_expr("3D6>4")
    print(expr)                                  # 3D6>4
    print(evaluate(expr, SystemRandomSource()))  # 2 5 6 > 4: Pass 2 of 3
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import DiceError, ParseError, ValidationError
from .core.evaluator import SystemRandomSource, evaluate, roll
from .core.parser import parse_expr

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "DiceError",
    "ParseError",
    "ValidationError",
    "SystemRandomSource",
    "evaluate",
    "parse_expr",
    "roll",
]
