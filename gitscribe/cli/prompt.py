"""CLI command for the user prompt folder."""

import typer

from gitscribe import global_config
from gitscribe.llm.prompts import DEFAULT_PROMPTS, get_prompt_folder, save_default_prompts


def prompt_command(
    load: bool = typer.Option(
        False,
        "--load",
        help="Write the built-in prompts into the prompt folder for editing",
    ),
    no_confirm: bool = typer.Option(
        False,
        "--no-confirm",
        help="Overwrite existing prompt files without asking",
    ),
) -> None:
    """Show or initialize the prompt folder that overrides built-in prompts."""
    try:
        folder = get_prompt_folder()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Prompt folder: {folder}")

    if not load:
        for name in DEFAULT_PROMPTS:
            source = "custom" if (folder / name).is_file() else "built-in"
            typer.echo(f"  {name} ({source})")
        return

    if not no_confirm and not typer.confirm(
        "Do you want to load the default prompt data? This will overwrite your existing data.",
        default=False,
    ):
        typer.echo("Cancelled.")
        raise typer.Exit(0)

    try:
        written = save_default_prompts(folder)
    except OSError as e:
        typer.echo(f"Error: failed to write prompts to {folder}: {e.strerror}", err=True)
        raise typer.Exit(1)

    for path in written:
        typer.echo(f"✓ Saved {path.name} to {path}")
