"""Shared helpers for CLI commands."""

import os
from pathlib import Path
from typing import Optional

import typer

from gitscribe import global_config
from gitscribe.config import DEFAULT_DIFF_UNIFIED, DEFAULT_LANG, load_config
from gitscribe.git import GitCommand, get_git_dir


def load_settings() -> None:
    """Load config.yaml into the active settings.

    Exits with status 1 if the config file cannot be read.
    """
    try:
        load_config()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def build_git_command(
    diff_unified: Optional[int],
    exclude_list: Optional[list[str]],
    amend: bool,
) -> GitCommand:
    """Create a GitCommand from CLI options and the git config section.

    CLI options win over config.yaml; exclusions from both are combined.
    """
    settings = global_config.get_git_settings()
    if diff_unified is None:
        diff_unified = int(settings["diff_unified"] or DEFAULT_DIFF_UNIFIED)
    excludes = list(settings["exclude_list"]) + split_list_option(exclude_list)
    return GitCommand(diff_unified=diff_unified, exclude_list=excludes, amend=amend)


def split_list_option(values: Optional[list[str]]) -> list[str]:
    """Flatten repeatable, comma-separated CLI values into a list."""
    items = []
    for value in values or []:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


def effective_lang(lang: Optional[str]) -> str:
    """Get the output language code from the CLI option or config.yaml."""
    return (lang or global_config.get_value("output.lang") or DEFAULT_LANG).lower()


def get_message_file(file: Optional[str]) -> Path:
    """Get the path the commit message is written to.

    Priority: --file option, output.file from config.yaml, then
    COMMIT_EDITMSG in the repository's git directory.
    """
    target = file or global_config.get_value("output.file")
    if target:
        return Path(target)
    return get_git_dir() / "COMMIT_EDITMSG"


def write_message_file(path: Path, message: str) -> None:
    """Write the commit message with owner-only permissions (0600)."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(message)
    os.chmod(path, 0o600)


def mask_key(api_key: str) -> str:
    """Mask an API key for display, keeping only its ends."""
    if len(api_key) > 12:
        return api_key[:8] + "..." + api_key[-4:]
    return "***"
