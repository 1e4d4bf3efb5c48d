"""Root callback for the gitscribe CLI."""

from typing import Optional

import typer

from gitscribe import __version__
from gitscribe.logging_utils import configure_logging


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gitscribe {__version__}")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show the gitscribe version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log output (-v for info, -vv for debug)",
    ),
) -> None:
    """gitscribe: AI-generated commit messages and code reviews for staged changes."""
    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
