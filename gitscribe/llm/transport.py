"""HTTP transport for LLM provider SDKs.

The openai config section carries transport options that apply to every
provider:
- proxy: HTTP(S) proxy URL, e.g. http://proxy.internal:3128
- socks: SOCKS5 proxy, either host:port or socks5://host:port
- skip_verify: Disable TLS certificate verification
- headers: Extra request headers as KEY=value items

The openai, anthropic and groq SDKs accept an httpx.Client; Gemini gets the
same settings through its HttpOptions.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

import httpx

from gitscribe import global_config
from gitscribe.llm.exceptions import LLMError

logger = logging.getLogger(__name__)


@dataclass
class TransportSettings:
    """Resolved transport options for outgoing LLM requests."""

    proxy: Optional[str] = None
    verify: bool = True
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_default(self) -> bool:
        """True if nothing differs from the SDKs' own HTTP client."""
        return self.proxy is None and self.verify and not self.headers

    def client_args(self) -> Dict[str, Any]:
        """Keyword arguments for httpx.Client, headers excluded."""
        args: Dict[str, Any] = {"verify": self.verify}
        if self.proxy:
            args["proxy"] = self.proxy
        return args


def parse_headers(items: Iterable[str]) -> Dict[str, str]:
    """Parse KEY=value header items.

    Items without "=" or with an empty name or value are skipped.

    Args:
        items: Strings such as ["X-Team=core", "X-Trace=1"].

    Returns:
        Dictionary of header names to values.
    """
    headers = {}
    for item in items:
        name, sep, value = item.partition("=")
        name, value = name.strip(), value.strip()
        if not sep or not name or not value:
            logger.debug("Skipping malformed header item")
            continue
        headers[name] = value
    return headers


def _socks_url(socks: str) -> str:
    if "://" in socks:
        return socks
    return f"socks5://{socks}"


def get_transport_settings() -> TransportSettings:
    """Build transport settings from config.yaml.

    An HTTP proxy wins over a SOCKS proxy when both are set.

    Returns:
        The transport settings.

    Raises:
        GlobalConfigError: If a transport value in config.yaml is invalid.
    """
    raw = global_config.get_transport_settings()

    proxy = raw["proxy"]
    if not proxy and raw["socks"]:
        proxy = _socks_url(raw["socks"])

    if raw["skip_verify"]:
        logger.warning("TLS certificate verification is disabled (openai.skip_verify)")

    return TransportSettings(
        proxy=proxy,
        verify=not raw["skip_verify"],
        headers=parse_headers(raw["headers"]),
    )


def create_http_client(timeout: float) -> Optional[httpx.Client]:
    """Create the httpx client passed to the provider SDKs.

    Args:
        timeout: Request timeout in seconds.

    Returns:
        A configured client, or None when no transport option is set so the
        SDK uses its own default client.

    Raises:
        LLMError: If the proxy URL is invalid.
        GlobalConfigError: If a transport value in config.yaml is invalid.
    """
    settings = get_transport_settings()
    if settings.is_default:
        return None

    try:
        return httpx.Client(
            timeout=timeout,
            headers=settings.headers,
            **settings.client_args(),
        )
    except (httpx.InvalidURL, ValueError) as e:
        raise LLMError(f"Invalid proxy setting: {e}") from e
