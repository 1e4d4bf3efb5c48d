"""Google Gemini provider implementation."""

from google import genai
from google.genai import errors, types

import gitscribe.config as _config
from gitscribe.config import LLMProvider
from gitscribe.llm.base import BaseLLMProvider, CompletionResult
from gitscribe.llm.exceptions import LLMError
from gitscribe.llm.prompts import SYSTEM_PROMPT
from gitscribe.llm.transport import get_transport_settings

# Models with built-in "thinking" spend part of max_output_tokens on
# internal reasoning, so they get a larger budget.
THINKING_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.5-pro",
]

THINKING_TOKEN_MULTIPLIER = 3


class GeminiProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    provider = LLMProvider.GEMINI
    display_name = "Gemini"

    def _is_thinking_model(self) -> bool:
        return any(name in self.model.lower() for name in THINKING_MODELS)

    def _create_client(self, api_key: str):
        transport = get_transport_settings()
        if transport.is_default:
            return genai.Client(api_key=api_key)

        # The SDK builds its own httpx client from client_args
        return genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(
                headers=transport.headers or None,
                client_args=transport.client_args(),
            ),
        )

    def complete(self, prompt: str) -> CompletionResult:
        """Send a prompt through the Gemini generate_content API.

        Args:
            prompt: The user prompt.

        Returns:
            A CompletionResult with the response text and token usage.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            APIKeyHelperError: If the api_key_helper fails.
            LLMError: For other LLM-related errors, including blocked or
                truncated responses.
        """
        api_key = self.get_api_key()
        client = self._create_client(api_key)

        max_tokens = _config.MAX_TOKENS
        if self._is_thinking_model():
            max_tokens = max_tokens * THINKING_TOKEN_MULTIPLIER

        try:
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_PROMPT,
                    max_output_tokens=max_tokens,
                    temperature=_config.TEMPERATURE,
                    top_p=_config.TOP_P,
                ),
            )
        except errors.APIError as e:
            raise LLMError(f"Gemini API call failed: {e}")

        if not response.candidates:
            raise LLMError("Gemini returned no candidates in response")

        finish_reason = str(response.candidates[0].finish_reason or "")
        if "SAFETY" in finish_reason:
            raise LLMError(f"Gemini blocked the response due to safety filters: {finish_reason}")
        if "MAX_TOKENS" in finish_reason:
            raise LLMError(
                "Gemini response was truncated due to the max tokens limit. "
                "Try raising openai.max_tokens or reducing the diff size."
            )

        text = response.text or ""
        if not text.strip():
            raise LLMError("Gemini returned an empty response")

        input_tokens = 0
        output_tokens = 0
        usage = response.usage_metadata
        if usage:
            input_tokens = usage.prompt_token_count or 0
            # Thoughts consume the max_output_tokens budget too
            output_tokens = (usage.candidates_token_count or 0) + (usage.thoughts_token_count or 0)

        return CompletionResult(
            content=text,
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
