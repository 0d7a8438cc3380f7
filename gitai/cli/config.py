"""CLI commands for global configuration management."""

import typer

from gitai import global_config
from gitai.cli.utils import mask_secret
from gitai.config import (
    API_KEY_ENV_VARS,
    AVAILABLE_MODELS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    LLMProvider,
)

VALID_PROVIDERS = ", ".join(p.value for p in LLMProvider)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global gitai configuration in ~/.gitai/",
    add_completion=False,
)


def _parse_provider(provider: str) -> LLMProvider:
    try:
        return LLMProvider(provider.lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo(f"Valid providers: {VALID_PROVIDERS}")
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    try:
        config = global_config.load_global_config()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    if not config:
        typer.echo("No configuration found; using defaults.")

    typer.echo("Current gitai configuration (~/.gitai/config.yaml):")
    typer.echo()
    typer.echo(f"  Provider: {config.get('provider', DEFAULT_PROVIDER.value)}")
    typer.echo(f"  Model: {config.get('model', DEFAULT_MODEL)}")
    typer.echo(f"  Max Tokens: {config.get('max_tokens', DEFAULT_MAX_TOKENS)}")
    typer.echo(f"  Temperature: {config.get('temperature', DEFAULT_TEMPERATURE)}")
    typer.echo(f"  Max Attempts: {config.get('max_attempts', DEFAULT_MAX_ATTEMPTS)}")
    base_url = config.get("base_url")
    if base_url:
        typer.echo(f"  Base URL: {base_url}")
    typer.echo()

    try:
        provider = LLMProvider(config.get("provider", DEFAULT_PROVIDER.value))
    except ValueError:
        return
    env_var = API_KEY_ENV_VARS[provider]
    try:
        api_key = global_config.get_credential(env_var)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading credentials: {e}", err=True)
        raise typer.Exit(1)
    if api_key:
        typer.echo(f"  API Key ({env_var}): {mask_secret(api_key)}")
    else:
        typer.echo(f"  API Key ({env_var}): not set")


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(..., help=f"Provider name ({VALID_PROVIDERS})"),
) -> None:
    """Set or update an API key for a provider."""
    llm_provider = _parse_provider(provider)
    env_var = API_KEY_ENV_VARS[llm_provider]

    typer.echo(f"Setting API key for {llm_provider.value}")
    api_key = typer.prompt(f"Enter your {llm_provider.value} API key", hide_input=True)

    try:
        global_config.save_credential(env_var, api_key.strip())
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {llm_provider.value}")


@config_app.command("set-provider")
def config_set_provider(
    provider: str = typer.Argument(..., help=f"Provider name ({VALID_PROVIDERS})"),
    model: str = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (optional, will prompt if not provided)",
    ),
) -> None:
    """Set the active LLM provider and model."""
    llm_provider = _parse_provider(provider)

    if not model:
        models = AVAILABLE_MODELS[llm_provider]
        typer.echo(f"Available models for {llm_provider.value}:")
        for i, m in enumerate(models, 1):
            typer.echo(f"  {i}. {m}")

        model_choice = typer.prompt(f"Select a model (1-{len(models)})", type=int, default=1)
        if model_choice < 1 or model_choice > len(models):
            typer.echo("Invalid choice. Aborting.", err=True)
            raise typer.Exit(1)
        model = models[model_choice - 1]
    elif model not in AVAILABLE_MODELS[llm_provider]:
        typer.echo(f"Warning: {model} is not in the list of known models for {llm_provider.value}")
        if not typer.confirm("Continue anyway?", default=False):
            raise typer.Exit(0)

    try:
        global_config.set_provider_and_model(llm_provider, model)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Provider set to: {llm_provider.value}")
    typer.echo(f"✓ Model set to: {model}")


@config_app.command("set-max-attempts")
def config_set_max_attempts(
    max_attempts: int = typer.Argument(..., help="Number of proposals allowed per run"),
) -> None:
    """Set how many generated messages may be rejected before giving up."""
    try:
        global_config.set_max_attempts(max_attempts)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Max attempts set to: {max_attempts}")


@config_app.command("list-providers")
def config_list_providers() -> None:
    """List all available LLM providers and their known models."""
    for llm_provider in LLMProvider:
        typer.echo(f"{llm_provider.value}:")
        for model in AVAILABLE_MODELS[llm_provider]:
            typer.echo(f"  • {model}")
        typer.echo()
