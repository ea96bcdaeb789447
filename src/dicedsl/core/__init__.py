"""Core dicedsl functionality: identifiers, tokenizer, expression builder, evaluator, config."""

from . import ir
from .config import DiceConfig, find_config, load_config
from .errors import (
    ConfigError,
    DiceError,
    ErrorContext,
    MissingModeError,
    MultipleModeCharactersError,
    MultipleModesError,
    ParseError,
    UnrecognizedModeError,
    UnrecognizedSymbolError,
    ValidationError,
)
from .evaluator import RandomSource, RollOutcome, SystemRandomSource, evaluate, roll
from .identifiers import Identifier, IdentifierAccumulator, IdentifierKind, IdentifierSequence
from .parser import ExpressionBuilder, parse_expr, parse_identifiers
from .tokenizer import tokenize

__all__ = [
    "ir",
    # Errors
    "DiceError",
    "ParseError",
    "MultipleModesError",
    "MultipleModeCharactersError",
    "MissingModeError",
    "UnrecognizedModeError",
    "UnrecognizedSymbolError",
    "ValidationError",
    "ConfigError",
    "ErrorContext",
    # Tokenizing
    "Identifier",
    "IdentifierKind",
    "IdentifierAccumulator",
    "IdentifierSequence",
    "tokenize",
    # Building
    "ExpressionBuilder",
    "parse_expr",
    "parse_identifiers",
    # Evaluation
    "RandomSource",
    "SystemRandomSource",
    "RollOutcome",
    "roll",
    "evaluate",
    # Config
    "DiceConfig",
    "load_config",
    "find_config",
]
