"""CLI commands for checking the api_key_helper configuration."""

from typing import Optional

import typer

from gitscribe import global_config
from gitscribe.config import LLMProvider
from gitscribe.keyhelper import (
    HelperCacheError,
    HelperContext,
    HelperError,
    needs_refresh,
    read_cache,
    resolve_api_key,
)
from gitscribe.cli.utils import mask_key

helper_app = typer.Typer(
    name="helper",
    help="Check the api_key_helper configuration",
    add_completion=False,
)


def _is_cached(helper_cmd: str, refresh_interval: int) -> bool:
    if refresh_interval <= 0:
        return False
    try:
        return not needs_refresh(read_cache(helper_cmd), refresh_interval)
    except HelperCacheError:
        return False


@helper_app.command("test")
def helper_test(
    provider: str = typer.Option(
        "openai",
        "--provider",
        "-p",
        help="Provider whose helper to run (openai, azure, gemini, anthropic, groq)",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Deadline for the helper in seconds (default: 10)",
    ),
) -> None:
    """Resolve the API key through the configured helper and show it masked."""
    try:
        llm_provider = LLMProvider(provider.lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        raise typer.Exit(1)

    try:
        helper_cmd, refresh_interval = global_config.get_helper_settings(llm_provider)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not helper_cmd:
        typer.echo(f"Error: no api_key_helper configured for {llm_provider.value}", err=True)
        raise typer.Exit(1)

    cached = _is_cached(helper_cmd, refresh_interval)

    try:
        api_key = resolve_api_key(helper_cmd, refresh_interval, HelperContext(timeout))
    except HelperError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    source = "cache" if cached else "helper command"
    typer.echo(f"API key: {mask_key(api_key)} (from {source})")
    if refresh_interval > 0:
        typer.echo(f"Refresh interval: {refresh_interval}s")
    else:
        typer.echo("Refresh interval: 0 (cache disabled)")
