"""
Identifiers and the streaming accumulator that coalesces them.

The tokenizer emits one identifier per character. The accumulator merges
adjacent identifiers of the same kind (digits into numbers, operator
characters into operators, characters into item names) without lookahead,
holding the most recent one as "pending" until something of another kind
arrives.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto

from dicedsl.core.errors import MultipleModesError, make_parse_error

logger = logging.getLogger(__name__)


class IdentifierKind(StrEnum):
    """Identifier kinds produced by the tokenizer."""

    NUMBER = auto()
    MODE = auto()
    SYMBOL = auto()
    ELEMENT = auto()
    DELIMITER = auto()


# Kinds whose adjacent fragments concatenate into one identifier
_MERGEABLE = frozenset({IdentifierKind.NUMBER, IdentifierKind.SYMBOL, IdentifierKind.ELEMENT})


@dataclass(frozen=True, slots=True)
class Identifier:
    """A classified fragment of the expression source."""

    kind: IdentifierKind
    text: str = ""
    pos: int = 0

    @classmethod
    def number(cls, text: str, pos: int = 0) -> Identifier:
        return cls(IdentifierKind.NUMBER, text, pos)

    @classmethod
    def mode(cls, char: str, pos: int = 0) -> Identifier:
        return cls(IdentifierKind.MODE, char.upper(), pos)

    @classmethod
    def symbol(cls, text: str, pos: int = 0) -> Identifier:
        return cls(IdentifierKind.SYMBOL, text, pos)

    @classmethod
    def element(cls, text: str, pos: int = 0) -> Identifier:
        return cls(IdentifierKind.ELEMENT, text, pos)

    @classmethod
    def delimiter(cls, pos: int = 0) -> Identifier:
        return cls(IdentifierKind.DELIMITER, " ", pos)

    def merged_with(self, other: Identifier) -> Identifier:
        """Concatenate ``other`` onto this identifier, keeping this position."""
        return Identifier(self.kind, self.text + other.text, self.pos)

    def __repr__(self) -> str:
        return f"Identifier({self.kind}, {self.text!r}, pos={self.pos})"


class IdentifierSequence:
    """
    The finalized, immutable identifier stream of one expression.

    Produced by ``IdentifierAccumulator.finish()``, which flushes the last
    pending identifier first. The expression builder only accepts this type,
    never a bare accumulator.
    """

    __slots__ = ("_identifiers", "source")

    def __init__(self, identifiers: tuple[Identifier, ...], source: str = "") -> None:
        self._identifiers = identifiers
        self.source = source

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._identifiers)

    def __len__(self) -> int:
        return len(self._identifiers)

    def __getitem__(self, index: int) -> Identifier:
        return self._identifiers[index]

    def __repr__(self) -> str:
        return f"IdentifierSequence({list(self._identifiers)!r})"

    @property
    def kinds(self) -> list[IdentifierKind]:
        return [ident.kind for ident in self._identifiers]

    @property
    def texts(self) -> list[str]:
        return [ident.text for ident in self._identifiers]


class IdentifierAccumulator:
    """Coalesces pushed identifiers; see ``push`` for the merge rules."""

    def __init__(self, source: str = "") -> None:
        self.source = source
        self._identifiers: list[Identifier] = []
        self._pending: Identifier | None = None

    @property
    def pending(self) -> Identifier | None:
        return self._pending

    def holds(self, kind: IdentifierKind) -> bool:
        """True if the pending identifier is of ``kind``."""
        return self._pending is not None and self._pending.kind == kind

    def push(self, ident: Identifier) -> None:
        """
        Push one identifier.

        - Nothing pending: ``ident`` becomes pending (a delimiter is dropped).
        - Same mergeable kind pending: texts are concatenated.
        - Mode pending and ``ident`` is a mode: MultipleModesError.
        - Anything else: the pending identifier is flushed and ``ident``
          becomes pending, unless it is a delimiter.

        Raises:
            MultipleModesError: If two mode identifiers meet.
        """
        pending = self._pending

        if pending is None:
            if ident.kind != IdentifierKind.DELIMITER:
                self._pending = ident
            return

        if pending.kind == ident.kind:
            if ident.kind in _MERGEABLE:
                self._pending = pending.merged_with(ident)
                return
            if ident.kind == IdentifierKind.MODE:
                raise make_parse_error(
                    MultipleModesError,
                    f"Multiple modes detected: current={pending.text!r} pushed={ident.text!r}",
                    self.source,
                    ident.pos,
                )

        self.flush()
        if ident.kind != IdentifierKind.DELIMITER:
            self._pending = ident

    def flush(self) -> None:
        """Move the pending identifier, if any, into the finalized list."""
        if self._pending is not None:
            self._identifiers.append(self._pending)
            self._pending = None

    def finish(self) -> IdentifierSequence:
        """Flush the last pending identifier and freeze the result."""
        self.flush()
        sequence = IdentifierSequence(tuple(self._identifiers), self.source)
        logger.debug("Coalesced %r into %r", self.source, sequence)
        return sequence
