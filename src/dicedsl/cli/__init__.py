"""
dicedsl CLI package.

- roll.py: roll and inspect commands, interactive session
- ui.py: rich styled diagnostics
- utils.py: version and logging helpers
"""

import typer

from dicedsl._version import get_version
from dicedsl.cli.roll import inspect_command, roll_command
from dicedsl.cli.utils import version_callback

__version__ = get_version()

app = typer.Typer(
    help="""dicedsl – roll dice expressions

Expressions:
  • Throw:          3D6, D, 2D20
  • Throw+compare:  3D6>4, 5D10>=8, 2D6<>1
  • Shuffle:        S red green blue
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """dicedsl CLI main callback for global options."""
    pass


app.command(name="roll")(roll_command)
app.command(name="inspect")(inspect_command)


def main(argv: list[str] | None = None) -> None:
    """Console script entry point."""
    app(args=argv)


__all__ = ["__version__", "app", "main"]
