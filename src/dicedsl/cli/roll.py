"""
Roll commands for the dicedsl CLI.

- roll: parse and evaluate one expression, or every line of stdin
- inspect: show the identifier sequence and built expression as JSON
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

import typer

from dicedsl.cli.ui import print_dice_error, print_error, print_warning
from dicedsl.cli.utils import configure_logging
from dicedsl.core.config import DiceConfig, find_config
from dicedsl.core.errors import ConfigError, DiceError
from dicedsl.core.evaluator import RandomSource, SystemRandomSource, evaluate
from dicedsl.core.parser import parse_identifiers
from dicedsl.core.tokenizer import tokenize

logger = logging.getLogger(__name__)


# =============================================================================
# Helper Functions
# =============================================================================


def _load_config(
    config_path: Path | None,
    seed: int | None,
    repeat: int | None,
    on_error: str | None,
) -> DiceConfig:
    """Load config and apply CLI overrides, exiting with code 2 on failure."""
    try:
        config = find_config(config_path)
        return config.with_overrides(seed=seed, repeat=repeat, on_error=on_error)
    except ConfigError as e:
        print_error(e.message)
        raise typer.Exit(code=2)


def run_expression(text: str, config: DiceConfig, source: RandomSource) -> bool:
    """Parse one expression and print its display and result lines.

    Returns:
        False if the expression was rejected, True otherwise.
    """
    try:
        expr = parse_identifiers(tokenize(text))
    except DiceError as e:
        logger.debug("Rejected expression %r: %s", text, e.message)
        print_dice_error(e)
        return False

    typer.echo(f"{config.output.expression_prefix}{expr}")
    for _ in range(config.roll.repeat):
        typer.echo(f"{config.output.result_prefix}{evaluate(expr, source)}")
    return True


def run_session(lines: Iterable[str], config: DiceConfig, source: RandomSource) -> int:
    """Evaluate expressions line by line until the input ends.

    Blank lines are skipped. On a rejected expression the session either
    keeps reading or stops, depending on ``session.on_error``.

    Returns:
        Number of rejected expressions.
    """
    failures = 0
    for line in lines:
        text = line.rstrip()
        if not text:
            continue
        if not run_expression(text, config, source):
            failures += 1
            if config.session.stop_on_error:
                break
    return failures


# =============================================================================
# Commands
# =============================================================================


def roll_command(
    expression: str | None = typer.Argument(
        None,
        help="Dice expression, e.g. '3D6', '2D10>=7' or 'S red green blue'. "
        "Reads expressions from stdin, one per line, when omitted.",
    ),
    seed: int | None = typer.Option(
        None, "--seed", help="Seed the random source for reproducible results"
    ),
    repeat: int | None = typer.Option(
        None, "--repeat", "-n", min=0, help="Evaluate each expression this many times"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to dicedsl.toml (default: ./dicedsl.toml if present)"
    ),
    on_error: str | None = typer.Option(
        None,
        "--on-error",
        help="Interactive session behaviour on a bad expression: 'report' or 'exit'",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    Roll a dice expression.

    Examples:
        dicedsl roll 3D6          # three six-sided dice
        dicedsl roll "3D6>4"      # count draws above 4
        dicedsl roll "S A B C"    # shuffle three items
        dicedsl roll              # interactive: one expression per line
    """
    configure_logging(verbose)
    config = _load_config(config_path, seed, repeat, on_error)
    source = SystemRandomSource(config.roll.seed)
    if config.path:
        logger.debug("Loaded config from %s", config.path)

    if expression is not None:
        if not run_expression(expression, config, source):
            raise typer.Exit(code=1)
        return

    failures = run_session(sys.stdin, config, source)
    if failures and config.session.stop_on_error:
        raise typer.Exit(code=1)
    if failures:
        print_warning(f"{failures} expression(s) rejected")


def inspect_command(
    expression: str = typer.Argument(..., help="Dice expression to inspect"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    Show how an expression is tokenized and built, as JSON.
    """
    configure_logging(verbose)
    try:
        identifiers = tokenize(expression)
        expr = parse_identifiers(identifiers)
    except DiceError as e:
        print_dice_error(e)
        raise typer.Exit(code=1)

    payload = {
        "source": expression,
        "identifiers": [
            {"kind": str(ident.kind), "text": ident.text, "pos": ident.pos}
            for ident in identifiers
        ],
        "expression": {"type": type(expr).__name__, **expr.model_dump(mode="json")},
        "display": str(expr),
    }
    typer.echo(json.dumps(payload, indent=2))
