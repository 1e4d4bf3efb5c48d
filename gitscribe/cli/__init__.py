"""CLI entry point for gitscribe.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from gitscribe.cli.commit import commit_command
from gitscribe.cli.config import config_app
from gitscribe.cli.helper import helper_app
from gitscribe.cli.hook import hook_app
from gitscribe.cli.main import main_command
from gitscribe.cli.prompt import prompt_command
from gitscribe.cli.review import review_command

# Main application
app = typer.Typer(
    name="gitscribe",
    help="gitscribe: AI-generated commit messages and code reviews",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")
app.add_typer(hook_app, name="hook")
app.add_typer(helper_app, name="helper")

# Add individual commands
app.command("commit")(commit_command)
app.command("review")(review_command)
app.command("prompt")(prompt_command)

# Set the main callback (includes --version and --verbose)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "hook_app",
    "helper_app",
    "commit_command",
    "review_command",
    "prompt_command",
    "main_command",
]
