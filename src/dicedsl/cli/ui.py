"""
Rich output helpers for the dicedsl CLI.

Diagnostics go to stderr so that results on stdout stay pipeable.
"""

from rich.console import Console
from rich.style import Style
from rich.text import Text

from dicedsl.core.errors import DiceError

err_console = Console(stderr=True)

# Style definitions
STYLES = {
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
    "muted": Style(color="bright_black"),
}


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(Text(f"✗ {message}", style=STYLES["error"]))


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(Text(f"⚠ {message}", style=STYLES["warning"]))


def print_dice_error(error: DiceError) -> None:
    """Print a dice error, with the source marker underneath when known."""
    print_error(f"{type(error).__name__}: {error.message}")
    if error.context:
        err_console.print(Text(error.context.format(), style=STYLES["muted"]))
