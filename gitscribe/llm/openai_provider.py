"""OpenAI and Azure OpenAI provider implementations.

Both use the openai SDK. The openai config section also carries base_url
(any OpenAI-compatible endpoint, or the Azure resource endpoint),
api_version (Azure only) and the sampling penalties. Proxy, TLS and header
settings come from gitscribe.llm.transport.
"""

from openai import AzureOpenAI, OpenAI, OpenAIError

import gitscribe.config as _config
from gitscribe import global_config
from gitscribe.config import LLMProvider
from gitscribe.llm.base import BaseLLMProvider, CompletionResult
from gitscribe.llm.exceptions import LLMError
from gitscribe.llm.prompts import SYSTEM_PROMPT
from gitscribe.llm.transport import create_http_client

# Azure OpenAI REST API version used when openai.api_version is not set
DEFAULT_AZURE_API_VERSION = "2024-10-21"


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat completions provider."""

    provider = LLMProvider.OPENAI
    display_name = "OpenAI"

    def _create_client(self, api_key: str):
        base_url = global_config.get_value("openai.base_url") or None
        return OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=_config.TIMEOUT,
            http_client=create_http_client(_config.TIMEOUT),
        )

    def complete(self, prompt: str) -> CompletionResult:
        """Send a prompt through the chat completions API.

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
        client = self._create_client(api_key)

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=_config.MAX_TOKENS,
                temperature=_config.TEMPERATURE,
                top_p=_config.TOP_P,
                frequency_penalty=float(global_config.get_value("openai.frequency_penalty", 0.0)),
                presence_penalty=float(global_config.get_value("openai.presence_penalty", 0.0)),
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except OpenAIError as e:
            raise LLMError(f"{self.display_name} API call failed: {e}")

        if not response.choices:
            raise LLMError(f"{self.display_name} returned no choices in response")

        return CompletionResult(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens if response.usage else 0,
            output_tokens=response.usage.completion_tokens if response.usage else 0,
        )


class AzureOpenAIProvider(OpenAIProvider):
    """Azure OpenAI provider.

    openai.base_url is the resource endpoint and the model name is the
    deployment name.
    """

    provider = LLMProvider.AZURE
    display_name = "Azure OpenAI"

    def _create_client(self, api_key: str):
        endpoint = global_config.get_value("openai.base_url")
        if not endpoint:
            raise LLMError(
                "Azure OpenAI needs an endpoint. Set it using:\n"
                "  gitscribe config set openai.base_url https://<resource>.openai.azure.com"
            )
        api_version = global_config.get_value("openai.api_version") or DEFAULT_AZURE_API_VERSION
        return AzureOpenAI(
            api_key=api_key,
            azure_endpoint=endpoint,
            api_version=api_version,
            timeout=_config.TIMEOUT,
            http_client=create_http_client(_config.TIMEOUT),
        )
