"""API key helper exception classes.

Contains all exception classes for helper operations:
- HelperError: Base exception for API key helper errors
- HelperConfigError: Raised when the helper command is empty
- HelperSpawnError: Raised when the shell process cannot be started
- HelperExecutionError: Raised when the helper exits with a non-zero status
- HelperEmptyOutputError: Raised when the helper prints nothing usable
- HelperTimeoutError: Raised when the helper exceeds its deadline
- HelperCacheError: Raised when the cache file cannot be read or written

None of these messages ever include the resolved key or the helper's stderr.
"""

from typing import Optional


class HelperError(Exception):
    """Base exception for API key helper errors."""

    pass


class HelperConfigError(HelperError):
    """Raised when the api_key_helper command is missing or empty."""

    pass


class HelperSpawnError(HelperError):
    """Raised when the helper shell process could not be started."""

    pass


class HelperExecutionError(HelperError):
    """Raised when the helper process exits with a non-zero status."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class HelperEmptyOutputError(HelperError):
    """Raised when the helper succeeds but prints only whitespace."""

    pass


class HelperTimeoutError(HelperError):
    """Raised when the helper is still running at its deadline."""

    def __init__(self, message: str, timeout: Optional[float] = None):
        super().__init__(message)
        self.timeout = timeout


class HelperCacheError(HelperError):
    """Raised when the helper cache file cannot be read or written.

    Never propagated out of resolve_api_key(); the resolver falls back to
    running the helper.
    """

    pass
