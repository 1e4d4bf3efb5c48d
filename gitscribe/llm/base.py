"""Base classes and shared utilities for LLM providers."""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from gitscribe import global_config
from gitscribe.config import (
    API_KEY_ENV_VARS,
    HELPER_CONFIG_SECTIONS,
    LLMProvider,
    get_model,
)
from gitscribe.keyhelper import HelperError, resolve_api_key
from gitscribe.llm.exceptions import APIKeyHelperError, MissingAPIKeyError
from gitscribe.llm.prompts import (
    CODE_REVIEW,
    CONVENTIONAL_COMMIT,
    CONVENTIONAL_PREFIXES,
    SUMMARIZE_FILE_DIFF,
    SUMMARIZE_TITLE,
    TRANSLATION,
    get_language,
    render_prompt,
)

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "chore"


@dataclass
class CompletionResult:
    """Result from an LLM completion call, including token usage."""

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Subclasses set ``provider`` and implement ``complete``. The prompt
    helpers (summarize_diff, summarize_title, get_summary_prefix,
    review_diff, translate) are shared by every provider.
    """

    provider: LLMProvider
    display_name: str = "LLM"

    def __init__(self, model: Optional[str] = None):
        """Initialize the provider.

        Args:
            model: The model to use. Defaults to the configured model for
                this provider.
        """
        self.model = model or get_model(self.provider)
        self.api_key_env_var = API_KEY_ENV_VARS[self.provider]

    @abstractmethod
    def complete(self, prompt: str) -> CompletionResult:
        """Send a single user prompt with the shared system prompt.

        Args:
            prompt: The user prompt.

        Returns:
            A CompletionResult with the response text and token usage.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            APIKeyHelperError: If the api_key_helper fails.
            LLMError: For other LLM-related errors.
        """
        pass

    def get_api_key(self) -> str:
        """Get the API key for this provider.

        Checks in order:
        1. api_key_helper command from config.yaml (cached)
        2. Environment variable (a repo-level .env file is loaded into it)
        3. ~/.config/gitscribe/credentials file

        Returns:
            The API key string.

        Raises:
            APIKeyHelperError: If a helper is configured and fails.
            MissingAPIKeyError: If the API key is not found.
        """
        return self._get_api_key_with_fallback(self.api_key_env_var, self.display_name)

    def _get_api_key_with_fallback(self, env_var_name: str, provider_name: str) -> str:
        """Get the API key from the helper, the environment or the credentials file.

        A configured helper is authoritative: when it fails, the error is
        raised instead of falling back to other sources.

        Args:
            env_var_name: Environment variable name to check.
            provider_name: Human-readable provider name for error messages.

        Returns:
            The API key string.

        Raises:
            APIKeyHelperError: If a helper is configured and fails.
            MissingAPIKeyError: If the API key is not found.
        """
        helper_cmd, refresh_interval = global_config.get_helper_settings(self.provider)
        if helper_cmd:
            try:
                return resolve_api_key(helper_cmd, refresh_interval)
            except HelperError as e:
                raise APIKeyHelperError(str(e)) from e

        api_key = os.getenv(env_var_name)
        if api_key:
            return api_key

        try:
            api_key = global_config.get_credential(env_var_name)
        except global_config.GlobalConfigError as e:
            logger.warning("Could not read credentials file: %s", e)
            api_key = None
        if api_key:
            return api_key

        raise MissingAPIKeyError(
            f"{provider_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var_name}=your_key_here\n"
            f"  2. Run: gitscribe config set-key {self.provider.value}\n"
            f"  3. Configure a helper: gitscribe config set "
            f"{HELPER_CONFIG_SECTIONS[self.provider]}.api_key_helper '<command>'"
        )

    # ------------------------------------------------------------------
    # Prompt helpers
    # ------------------------------------------------------------------

    def summarize_diff(self, diff: str) -> CompletionResult:
        """Summarize a diff into bullet points."""
        return self.complete(render_prompt(SUMMARIZE_FILE_DIFF, file_diffs=diff))

    def summarize_title(self, summary_points: str) -> CompletionResult:
        """Turn summary bullet points into a one-line title.

        The title starts lowercase and has no trailing period so it reads
        well after a conventional commit prefix.
        """
        result = self.complete(render_prompt(SUMMARIZE_TITLE, summary_points=summary_points))
        title = result.content.strip().splitlines()[0].strip() if result.content.strip() else ""
        title = title.rstrip(".")
        if title:
            title = title[0].lower() + title[1:]
        result.content = title
        return result

    def get_summary_prefix(self, summary_points: str) -> CompletionResult:
        """Classify summary bullet points with a conventional commit prefix.

        Answers that are not a known prefix become "chore".
        """
        result = self.complete(
            render_prompt(CONVENTIONAL_COMMIT, summary_points=summary_points)
        )
        result.content = normalize_prefix(result.content)
        return result

    def review_diff(self, diff: str) -> CompletionResult:
        """Review a diff."""
        return self.complete(render_prompt(CODE_REVIEW, file_diffs=diff))

    def translate(self, message: str, lang_code: str) -> CompletionResult:
        """Translate a message into the language for lang_code."""
        return self.complete(
            render_prompt(
                TRANSLATION,
                output_language=get_language(lang_code),
                output_message=message,
            )
        )


def normalize_prefix(answer: str) -> str:
    """Map a model answer to one of CONVENTIONAL_PREFIXES.

    Accepts answers such as "feat", "Feat:", "fix(api):" or "`docs`".

    Args:
        answer: The raw model answer.

    Returns:
        The matching prefix, or DEFAULT_PREFIX if none matches.
    """
    word = answer.strip().strip("`'\"").lower()
    for separator in (":", "(", "!", " ", "\n"):
        word = word.split(separator, 1)[0]
    if word in CONVENTIONAL_PREFIXES:
        return word
    return DEFAULT_PREFIX
