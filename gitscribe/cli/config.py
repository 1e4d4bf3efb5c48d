"""CLI commands for global configuration management."""

import typer

from gitscribe import global_config
from gitscribe.config import API_KEY_ENV_VARS, LLMProvider
from gitscribe.cli.utils import mask_key

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global gitscribe configuration in ~/.config/gitscribe/",
    add_completion=False,
)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Dotted config key, e.g. openai.model"),
    value: str = typer.Argument(..., help="New value (comma-separated for lists)"),
) -> None:
    """Set a configuration value in config.yaml."""
    try:
        stored = global_config.set_value(key, value)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {key} = {stored}")


@config_app.command("list")
def config_list() -> None:
    """Show all configuration values and stored API keys (masked)."""
    try:
        config = global_config.load_global_config()
        credentials = global_config.load_credentials()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    if not config and not credentials:
        typer.echo("No configuration found. Use 'gitscribe config set <key> <value>'.")
        return

    typer.echo(f"Configuration ({global_config.get_config_file_path()}):")
    for key, value in sorted(global_config.flatten_config(config).items()):
        if isinstance(value, list):
            value = ", ".join(str(item) for item in value)
        typer.echo(f"  {key} = {value}")

    if credentials:
        typer.echo()
        typer.echo(f"API keys ({global_config.get_credentials_file_path()}):")
        for env_var, api_key in sorted(credentials.items()):
            typer.echo(f"  {env_var} = {mask_key(api_key)}")


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(
        ...,
        help="Provider name (openai, azure, gemini, anthropic, groq)",
    )
) -> None:
    """Set or update a static API key for a provider."""
    try:
        llm_provider = LLMProvider(provider.lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo(f"Valid providers: {', '.join(p.value for p in LLMProvider)}", err=True)
        raise typer.Exit(1)

    env_var = API_KEY_ENV_VARS[llm_provider]
    api_key = typer.prompt(f"Enter your {llm_provider.value} API key", hide_input=True)

    try:
        global_config.save_credential(env_var, api_key.strip())
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {llm_provider.value}")
