"""Configuration for gitscribe LLM providers.

Configuration is loaded from ~/.config/gitscribe/config.yaml
Use 'gitscribe config' commands to modify settings.
"""

from enum import Enum
from typing import Optional


class LLMProvider(Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    AZURE = "azure"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    GROQ = "groq"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================
# These are used only if ~/.config/gitscribe/config.yaml doesn't set them

DEFAULT_PROVIDER = LLMProvider.OPENAI
DEFAULT_MAX_TOKENS = 300
DEFAULT_TEMPERATURE = 1.0
DEFAULT_TOP_P = 1.0
DEFAULT_TIMEOUT = 30.0
DEFAULT_DIFF_UNIFIED = 3
DEFAULT_LANG = "en"


# ============================================================
# ACTIVE CONFIGURATION (loaded from global config)
# ============================================================

# Initially set to defaults - will be overridden by load_config()
ACTIVE_PROVIDER = DEFAULT_PROVIDER
ACTIVE_MODEL: Optional[str] = None  # None means DEFAULT_MODELS[provider]
MAX_TOKENS = DEFAULT_MAX_TOKENS
TEMPERATURE = DEFAULT_TEMPERATURE
TOP_P = DEFAULT_TOP_P
TIMEOUT = DEFAULT_TIMEOUT


def load_config() -> None:
    """Load configuration from global config file.

    This should be called by the CLI before using the LLM.

    Raises:
        GlobalConfigError: If the config file exists but cannot be parsed.
    """
    global ACTIVE_PROVIDER, ACTIVE_MODEL, MAX_TOKENS, TEMPERATURE, TOP_P, TIMEOUT

    # Import here to avoid circular dependency
    from gitscribe import global_config

    provider = global_config.get_active_provider()
    model = global_config.get_value("openai.model")
    max_tokens = global_config.get_value("openai.max_tokens")
    temperature = global_config.get_value("openai.temperature")
    top_p = global_config.get_value("openai.top_p")
    timeout = global_config.get_value("openai.timeout")

    if provider:
        ACTIVE_PROVIDER = provider
    if model:
        ACTIVE_MODEL = model
    if max_tokens is not None:
        MAX_TOKENS = int(max_tokens)
    if temperature is not None:
        TEMPERATURE = float(temperature)
    if top_p is not None:
        TOP_P = float(top_p)
    if timeout is not None:
        TIMEOUT = float(timeout)


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.OPENAI: [
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4.1-nano",
        "gpt-4o",
        "gpt-4o-mini",
    ],
    LLMProvider.AZURE: [
        "gpt-4o",
        "gpt-4o-mini",
    ],
    LLMProvider.GEMINI: [
        "gemini-2.5-pro",
        "gemini-2.5-flash",
        "gemini-2.0-flash",
        "gemini-2.0-flash-lite",
    ],
    LLMProvider.ANTHROPIC: [
        "claude-sonnet-4-20250514",
        "claude-3-5-sonnet-latest",
        "claude-3-5-haiku-latest",
    ],
    LLMProvider.GROQ: [
        "llama-3.3-70b-versatile",
        "llama-3.1-8b-instant",
    ],
}

DEFAULT_MODELS = {
    LLMProvider.OPENAI: "gpt-4o-mini",
    LLMProvider.AZURE: "gpt-4o-mini",
    LLMProvider.GEMINI: "gemini-2.0-flash",
    LLMProvider.ANTHROPIC: "claude-3-5-haiku-latest",
    LLMProvider.GROQ: "llama-3.3-70b-versatile",
}


def get_model(provider: LLMProvider) -> str:
    """Get the model to use for a provider.

    The configured model only applies to the active provider.

    Args:
        provider: The LLM provider.

    Returns:
        The model name.
    """
    if provider == ACTIVE_PROVIDER and ACTIVE_MODEL:
        return ACTIVE_MODEL
    return DEFAULT_MODELS[provider]


# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.AZURE: "AZURE_OPENAI_API_KEY",
    LLMProvider.GEMINI: "GEMINI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    LLMProvider.GROQ: "GROQ_API_KEY",
}

# Config section holding api_key_helper settings for each provider.
# OpenAI-compatible providers share the openai section.
HELPER_CONFIG_SECTIONS = {
    LLMProvider.OPENAI: "openai",
    LLMProvider.AZURE: "openai",
    LLMProvider.GROQ: "openai",
    LLMProvider.GEMINI: "gemini",
    LLMProvider.ANTHROPIC: "anthropic",
}


def get_api_key_env_var(provider: LLMProvider) -> str:
    """Get the environment variable name for the API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[provider]
