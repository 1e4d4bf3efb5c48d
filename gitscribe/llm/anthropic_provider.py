"""Anthropic Claude provider implementation."""

from anthropic import Anthropic, AnthropicError

import gitscribe.config as _config
from gitscribe.config import LLMProvider
from gitscribe.llm.base import BaseLLMProvider, CompletionResult
from gitscribe.llm.exceptions import LLMError
from gitscribe.llm.prompts import SYSTEM_PROMPT
from gitscribe.llm.transport import create_http_client


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    provider = LLMProvider.ANTHROPIC
    display_name = "Anthropic"

    def complete(self, prompt: str) -> CompletionResult:
        """Send a prompt through the Anthropic messages API.

        Args:
            prompt: The user prompt.

        Returns:
            A CompletionResult with the response text and token usage.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            APIKeyHelperError: If the api_key_helper fails.
            LLMError: For other LLM-related errors.
        """
        api_key = self.get_api_key()
        client = Anthropic(
            api_key=api_key,
            timeout=_config.TIMEOUT,
            http_client=create_http_client(_config.TIMEOUT),
        )

        try:
            message = client.messages.create(
                model=self.model,
                max_tokens=_config.MAX_TOKENS,
                temperature=min(_config.TEMPERATURE, 1.0),
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except AnthropicError as e:
            raise LLMError(f"Anthropic API call failed: {e}")

        text = "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )

        return CompletionResult(
            content=text,
            model=self.model,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
