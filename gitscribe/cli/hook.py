"""CLI commands for the prepare-commit-msg hook."""

import typer

from gitscribe.git import GitCommand, GitError

hook_app = typer.Typer(
    name="hook",
    help="Install or remove the gitscribe prepare-commit-msg hook",
    add_completion=False,
)


@hook_app.command("install")
def hook_install() -> None:
    """Install the prepare-commit-msg hook in the current repository."""
    try:
        path = GitCommand().install_hook()
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Installed hook: {path}")


@hook_app.command("uninstall")
def hook_uninstall() -> None:
    """Remove the prepare-commit-msg hook from the current repository."""
    try:
        path = GitCommand().uninstall_hook()
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Removed hook: {path}")
