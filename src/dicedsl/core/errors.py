"""
Error types for dice expression parsing, validation, and configuration.

Every failure in the core surfaces as a ``DiceError`` subclass. Callers
decide whether an error ends the process or is reported and skipped.
"""

from dataclasses import dataclass
from typing import Optional


class DiceError(Exception):
    """Base exception for all dicedsl errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class ParseError(DiceError):
    """
    Raised when an expression does not follow the dice grammar.

    Examples:
    - Two mode letters
    - No mode letter
    - Unknown comparison operator
    """

    pass


class MultipleModesError(ParseError):
    """A second mode letter directly follows the first one (``DS``, ``dd``)."""


class MultipleModeCharactersError(ParseError):
    """A character that is invalid for the active mode appears after the mode letter."""


class MissingModeError(ParseError):
    """The expression contains no mode letter at all."""


class UnrecognizedModeError(ParseError):
    """The mode letter is neither ``D`` nor ``S``."""


class UnrecognizedSymbolError(ParseError):
    """A comparison operator run does not match any known operator."""


class ValidationError(DiceError):
    """
    Raised when a syntactically valid expression describes an impossible roll.

    Examples:
    - A die with zero faces (``D0``)
    """

    pass


class ConfigError(DiceError):
    """Raised when ``dicedsl.toml`` holds an unusable value."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the expression source.

    Attributes:
        source: The full expression text
        column: 0-based index of the offending character
    """

    source: str
    column: int

    def format(self) -> str:
        """
        Format the source with a marker under the error column.

        Returns:
            Two lines: the expression and a ``^^^`` marker
        """
        column = max(0, min(self.column, len(self.source)))
        return f"  {self.source}\n  {' ' * column}^^^"


def make_parse_error(
    error_cls: type[ParseError],
    message: str,
    source: str | None = None,
    column: int | None = None,
) -> ParseError:
    """
    Helper to create a ParseError subclass with optional context.

    Args:
        error_cls: Concrete ParseError subclass to instantiate
        message: Error description
        source: Optional expression text
        column: Optional 0-based column of the offending character

    Returns:
        Error instance with context if location provided
    """
    if source is not None and column is not None:
        return error_cls(message, ErrorContext(source=source, column=column))
    return error_cls(message)
