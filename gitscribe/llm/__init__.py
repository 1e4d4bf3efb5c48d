"""LLM provider module for gitscribe.

This module provides a unified interface to multiple LLM providers.
The active provider and model are configured in ~/.config/gitscribe/config.yaml.
"""

from typing import Optional

from dotenv import load_dotenv

import gitscribe.config as _config
from gitscribe.config import LLMProvider
from gitscribe.llm.base import BaseLLMProvider, CompletionResult, normalize_prefix
from gitscribe.llm.exceptions import APIKeyHelperError, LLMError, MissingAPIKeyError

# Load environment variables from .env file
load_dotenv()


def get_provider(
    provider: Optional[LLMProvider] = None,
    model: Optional[str] = None,
) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        provider: The provider to use. Defaults to the active provider.
        model: The model to use. Defaults to the configured model for the
            provider.

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    provider = provider or _config.ACTIVE_PROVIDER

    if provider == LLMProvider.OPENAI:
        from gitscribe.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(model=model)

    elif provider == LLMProvider.AZURE:
        from gitscribe.llm.openai_provider import AzureOpenAIProvider

        return AzureOpenAIProvider(model=model)

    elif provider == LLMProvider.GEMINI:
        from gitscribe.llm.google_provider import GeminiProvider

        return GeminiProvider(model=model)

    elif provider == LLMProvider.ANTHROPIC:
        from gitscribe.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(model=model)

    elif provider == LLMProvider.GROQ:
        from gitscribe.llm.groq_provider import GroqProvider

        return GroqProvider(model=model)

    else:
        raise ValueError(f"Unsupported provider: {provider}")


__all__ = [
    "BaseLLMProvider",
    "CompletionResult",
    "LLMError",
    "MissingAPIKeyError",
    "APIKeyHelperError",
    "normalize_prefix",
    "get_provider",
]
