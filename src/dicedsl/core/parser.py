"""
Expression builder for dice expressions.

Turns a coalesced identifier sequence into a typed expression:

    [times] mode [faces] [symbol value]     mode D
    [...] S element*                         mode S

Numbers fill slots in order: ``times`` (only before the mode letter), then
``faces``, then the comparison ``value`` once an operator has been seen.
"""

from __future__ import annotations

import logging

from dicedsl.core.errors import (
    ErrorContext,
    MissingModeError,
    UnrecognizedModeError,
    UnrecognizedSymbolError,
    ValidationError,
    make_parse_error,
)
from dicedsl.core.identifiers import Identifier, IdentifierKind, IdentifierSequence
from dicedsl.core.ir import SYMBOL_ALIASES, CompareOp, DiceExpr, Shuffle, Throw, ThrowCompare
from dicedsl.core.tokenizer import MODE_DICE, MODE_SHUFFLE, tokenize

logger = logging.getLogger(__name__)

DEFAULT_FACES = 6
DEFAULT_TIMES = 1
# Numbers must fit a signed 32-bit integer
MAX_NUMBER = 2**31 - 1


class ExpressionBuilder:
    """Collects slot values from an identifier sequence and builds the expression."""

    def __init__(self, identifiers: IdentifierSequence) -> None:
        self.identifiers = identifiers
        self.source = identifiers.source
        self.times: int | None = None
        self.mode: Identifier | None = None
        self.faces: Identifier | None = None
        self.op: CompareOp | None = None
        self.value: int | None = None
        self.elements: list[str] = []

    def build(self) -> DiceExpr:
        """Consume the sequence and return the expression.

        Raises:
            MissingModeError: If no mode letter was given.
            UnrecognizedModeError: If the mode letter is not D or S.
            UnrecognizedSymbolError: If an operator spelling is unknown.
            ValidationError: If a dice throw has fewer than one face, or a
                number does not fit a signed 32-bit integer.
        """
        for ident in self.identifiers:
            if ident.kind == IdentifierKind.NUMBER:
                if self._take_number(ident):
                    # Only one comparison value is meaningful
                    break
            elif ident.kind == IdentifierKind.MODE:
                self.mode = ident
            elif ident.kind == IdentifierKind.SYMBOL:
                self.op = self._compare_op(ident)
            elif ident.kind == IdentifierKind.ELEMENT:
                self.elements.append(ident.text)

        expr = self._finalize()
        logger.debug("Built %r from %r", expr, self.source)
        return expr

    def _take_number(self, ident: Identifier) -> bool:
        """Assign a number to the next free slot; True once ``value`` is filled."""
        if self.times is None and self.mode is None:
            self.times = self._to_int(ident)
        elif self.faces is None:
            self.faces = ident
        elif self.op is not None and self.value is None:
            self.value = self._to_int(ident)
            return True
        else:
            logger.debug("Ignoring surplus number %r at column %d", ident.text, ident.pos)
        return False

    def _to_int(self, ident: Identifier) -> int:
        # Compare lengths first: int() refuses very long digit strings
        digits = ident.text.lstrip("0") or "0"
        if len(digits) > len(str(MAX_NUMBER)) or int(digits) > MAX_NUMBER:
            shown = digits if len(digits) <= 12 else f"{digits[:12]}..."
            raise ValidationError(
                f"Number {shown} is larger than {MAX_NUMBER}",
                ErrorContext(source=self.source, column=ident.pos),
            )
        return int(digits)

    def _compare_op(self, ident: Identifier) -> CompareOp:
        op = SYMBOL_ALIASES.get(ident.text)
        if op is None:
            raise make_parse_error(
                UnrecognizedSymbolError,
                f"Symbol {ident.text!r} unrecognised",
                self.source,
                ident.pos,
            )
        return op

    def _finalize(self) -> DiceExpr:
        if self.mode is None:
            raise MissingModeError(f"No mode provided in {self.source!r}")

        if self.mode.text == MODE_DICE:
            throw = Throw(faces=self._faces(), times=self._times())
            if self.op is None:
                return throw
            return ThrowCompare(throw=throw, op=self.op, value=self.value or 0)

        if self.mode.text == MODE_SHUFFLE:
            return Shuffle(elements=tuple(self.elements))

        raise make_parse_error(
            UnrecognizedModeError,
            f"Unrecognised mode: {self.mode.text!r}",
            self.source,
            self.mode.pos,
        )

    def _faces(self) -> int:
        if self.faces is None:
            return DEFAULT_FACES
        faces = self._to_int(self.faces)
        if faces < 1:
            raise ValidationError(
                f"A die needs at least one face, got {faces}",
                ErrorContext(source=self.source, column=self.faces.pos),
            )
        return faces

    def _times(self) -> int:
        return DEFAULT_TIMES if self.times is None else self.times


def parse_identifiers(identifiers: IdentifierSequence) -> DiceExpr:
    """Build an expression from an already tokenized sequence."""
    return ExpressionBuilder(identifiers).build()


def parse_expr(source: str) -> DiceExpr:
    """Parse a dice expression string into a typed expression.

    Args:
        source: Expression string (e.g., "3D6>4" or "S red green blue")

    Returns:
        Throw, ThrowCompare or Shuffle.

    Raises:
        ParseError: If the expression is malformed.
        ValidationError: If the expression describes an impossible throw.
    """
    return parse_identifiers(tokenize(source))
