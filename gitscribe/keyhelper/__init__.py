"""API key helper for gitscribe.

This package resolves provider API keys by running a user-configured shell
command, with a bounded timeout and an on-disk cache:
- exceptions: HelperError and its subclasses
- context: HelperContext deadline and cancellation carrier
- models: CachedCredential data model
- paths: Functions for getting cache file paths
- cache: Cache read/write and staleness checks
- executor: IsolatedExecutor and the platform selector
- resolver: execute_helper and resolve_api_key
"""

# Exceptions
from gitscribe.keyhelper.exceptions import (
    HelperCacheError,
    HelperConfigError,
    HelperEmptyOutputError,
    HelperError,
    HelperExecutionError,
    HelperSpawnError,
    HelperTimeoutError,
)

# Context and models
from gitscribe.keyhelper.context import HelperContext
from gitscribe.keyhelper.models import CachedCredential

# Cache operations
from gitscribe.keyhelper.cache import needs_refresh, read_cache, write_cache
from gitscribe.keyhelper.paths import get_cache_dir, get_cache_file, get_cache_key

# Execution
from gitscribe.keyhelper.executor import (
    HELPER_TIMEOUT,
    TERMINATE_GRACE_PERIOD,
    ExecutionResult,
    IsolatedExecutor,
    get_executor,
)
from gitscribe.keyhelper.resolver import (
    DEFAULT_REFRESH_INTERVAL,
    execute_helper,
    resolve_api_key,
)


__all__ = [
    # Exceptions
    "HelperError",
    "HelperConfigError",
    "HelperSpawnError",
    "HelperExecutionError",
    "HelperEmptyOutputError",
    "HelperTimeoutError",
    "HelperCacheError",
    # Context and models
    "HelperContext",
    "CachedCredential",
    # Cache operations
    "needs_refresh",
    "read_cache",
    "write_cache",
    "get_cache_dir",
    "get_cache_file",
    "get_cache_key",
    # Execution
    "HELPER_TIMEOUT",
    "TERMINATE_GRACE_PERIOD",
    "ExecutionResult",
    "IsolatedExecutor",
    "get_executor",
    "DEFAULT_REFRESH_INTERVAL",
    "execute_helper",
    "resolve_api_key",
]
