"""LLM-related exception classes.

Contains all exception classes for LLM operations:
- LLMError: Base exception for LLM-related errors
- MissingAPIKeyError: Raised when no API key can be found
- APIKeyHelperError: Raised when the configured api_key_helper fails
"""


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


class APIKeyHelperError(LLMError):
    """Raised when the api_key_helper command fails.

    The message is the helper's own error message, which never contains
    the key or the helper's stderr.
    """

    pass
