"""Groq provider implementation."""

from groq import Groq, GroqError

import gitscribe.config as _config
from gitscribe.config import LLMProvider
from gitscribe.llm.base import BaseLLMProvider, CompletionResult
from gitscribe.llm.exceptions import LLMError
from gitscribe.llm.prompts import SYSTEM_PROMPT
from gitscribe.llm.transport import create_http_client


class GroqProvider(BaseLLMProvider):
    """Groq LLM provider (fast inference for open-source models)."""

    provider = LLMProvider.GROQ
    display_name = "Groq"

    def complete(self, prompt: str) -> CompletionResult:
        """Send a prompt through the Groq chat completions API."""
        api_key = self.get_api_key()
        client = Groq(
            api_key=api_key,
            timeout=_config.TIMEOUT,
            http_client=create_http_client(_config.TIMEOUT),
        )

        try:
            # OpenAI-compatible API
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=_config.MAX_TOKENS,
                temperature=_config.TEMPERATURE,
                top_p=_config.TOP_P,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except GroqError as e:
            raise LLMError(f"Groq API call failed: {e}")

        return CompletionResult(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
        )
