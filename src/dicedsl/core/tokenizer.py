"""
Tokenizer for dice expressions.

Classifies each character of an expression into an identifier and feeds it
to an ``IdentifierAccumulator``. Classification depends on whether a mode
letter has been seen yet:

- space: always a delimiter
- before the mode: digits are numbers, ``<=>!`` are symbols, anything else
  is the mode letter
- after mode ``S``: every other character is part of an element name
- after any other mode: digits and symbols as before; another letter is an
  error
"""

from __future__ import annotations

import logging

from dicedsl.core.errors import MultipleModeCharactersError, make_parse_error
from dicedsl.core.identifiers import (
    Identifier,
    IdentifierAccumulator,
    IdentifierKind,
    IdentifierSequence,
)

logger = logging.getLogger(__name__)

DELIMITER = " "
SYMBOL_CHARS = frozenset("<=>!")
DIGITS = frozenset("0123456789")

MODE_DICE = "D"
MODE_SHUFFLE = "S"


def tokenize(source: str) -> IdentifierSequence:
    """Tokenize an expression string into a coalesced identifier sequence.

    Raises:
        MultipleModesError: If two mode letters are adjacent (``DS``).
        MultipleModeCharactersError: If a letter follows the mode elsewhere.
    """
    store = IdentifierAccumulator(source)
    mode: str | None = None  # upper case

    for pos, c in enumerate(source):
        if c == DELIMITER:
            store.push(Identifier.delimiter(pos))
            continue

        if mode == MODE_SHUFFLE:
            store.push(Identifier.element(c, pos))
            continue

        if c in DIGITS:
            store.push(Identifier.number(c, pos))
        elif c in SYMBOL_CHARS:
            store.push(Identifier.symbol(c, pos))
        elif mode is None:
            mode = c.upper()
            logger.debug("Mode %r fixed at column %d", mode, pos)
            store.push(Identifier.mode(c, pos))
        elif store.holds(IdentifierKind.MODE):
            # Raises MultipleModesError
            store.push(Identifier.mode(c, pos))
        else:
            raise make_parse_error(
                MultipleModeCharactersError,
                f"Multiple mode characters detected: {c!r} after mode {mode!r}",
                source,
                pos,
            )

    return store.finish()
