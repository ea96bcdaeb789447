"""
dicedsl CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import os
import platform
import sys

import typer

from dicedsl._version import get_version

LOG_LEVEL_ENV = "DICEDSL_LOG_LEVEL"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        typer.echo(f"dicedsl version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo(f"  Architecture:  {platform.machine()}")

        raise typer.Exit()


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from ``DICEDSL_LOG_LEVEL`` (``--verbose`` forces DEBUG)."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("dicedsl").setLevel(level)
