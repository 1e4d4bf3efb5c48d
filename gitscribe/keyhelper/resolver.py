"""Resolve API keys through a user-configured helper command.

The helper is any shell command that prints an API key on stdout, for
example ``op read op://dev/openai/credential`` or ``vault kv get -field=key
secret/openai``. Its result is cached on disk for a refresh interval so the
helper does not run on every invocation.

Security note: the returned API key is sensitive and is never logged or
included in an exception message, and neither is the helper's stderr.
"""

import logging
from typing import Optional

from gitscribe.keyhelper.cache import needs_refresh, read_cache, write_cache
from gitscribe.keyhelper.context import HelperContext
from gitscribe.keyhelper.exceptions import (
    HelperCacheError,
    HelperConfigError,
    HelperEmptyOutputError,
    HelperExecutionError,
    HelperTimeoutError,
)
from gitscribe.keyhelper.executor import HELPER_TIMEOUT, get_executor
from gitscribe.keyhelper.paths import get_cache_key

logger = logging.getLogger(__name__)

# Default interval for refreshing API keys (15 minutes)
DEFAULT_REFRESH_INTERVAL = 900


def _short_key(helper_cmd: str) -> str:
    """Identify a helper in log lines without printing the command."""
    return get_cache_key(helper_cmd)[:12]


def execute_helper(helper_cmd: str, ctx: Optional[HelperContext] = None) -> str:
    """Run the helper command and return the key it prints.

    The command runs in /bin/sh (cmd.exe on Windows) in its own process
    group or job. If ctx has no deadline, a HELPER_TIMEOUT deadline is
    imposed. On timeout the whole process tree is terminated.

    Args:
        helper_cmd: The helper shell command.
        ctx: Optional deadline and cancellation carrier.

    Returns:
        The stripped stdout of the helper.

    Raises:
        HelperConfigError: If the command is empty.
        HelperSpawnError: If the shell cannot be started.
        HelperExecutionError: If the helper exits with a non-zero status.
        HelperEmptyOutputError: If the helper prints nothing.
        HelperTimeoutError: If the deadline passes or ctx is cancelled.
    """
    if not helper_cmd:
        raise HelperConfigError("api_key_helper command is empty")

    ctx = ctx or HelperContext()
    timeout = ctx.remaining() if ctx.has_deadline else HELPER_TIMEOUT

    if ctx.expired:
        raise HelperTimeoutError(
            "api_key_helper deadline passed before the command started",
            timeout=timeout,
        )

    logger.debug("Running api_key_helper %s (timeout %.1fs)", _short_key(helper_cmd), timeout)
    result = get_executor().run(helper_cmd, ctx, timeout)

    if result.returncode != 0:
        # stderr is deliberately left out, it may contain the key
        raise HelperExecutionError(
            f"api_key_helper command failed: exit status {result.returncode}",
            returncode=result.returncode,
        )

    api_key = result.stdout.strip()
    if not api_key:
        raise HelperEmptyOutputError("api_key_helper command returned empty output")

    return api_key


def _store(helper_cmd: str, api_key: str) -> bool:
    """Write the key to the cache. Failures are logged, never raised.

    Returns:
        True if the cache file was written.
    """
    try:
        write_cache(helper_cmd, api_key)
    except HelperCacheError as e:
        logger.warning("Could not cache api_key_helper result: %s", e)
        return False
    return True


def resolve_api_key(
    helper_cmd: str,
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
    ctx: Optional[HelperContext] = None,
) -> str:
    """Return the API key for a helper command, using the cache when fresh.

    The cache lives in ~/.config/gitscribe/.cache/, one 0600 file per
    helper command. A broken cache file is ignored and replaced.

    Args:
        helper_cmd: The helper shell command.
        refresh_interval: How long a cached key stays valid, in seconds.
            0 disables the cache and runs the helper on every call.
        ctx: Optional deadline and cancellation carrier.

    Returns:
        The API key.

    Raises:
        HelperConfigError: If the command is empty.
        HelperSpawnError: If the shell cannot be started.
        HelperExecutionError: If the helper exits with a non-zero status.
        HelperEmptyOutputError: If the helper prints nothing.
        HelperTimeoutError: If the deadline passes or ctx is cancelled.
    """
    if not helper_cmd:
        raise HelperConfigError("api_key_helper command is empty")

    key_id = _short_key(helper_cmd)

    cache = None
    if refresh_interval > 0:
        try:
            cache = read_cache(helper_cmd)
        except HelperCacheError as e:
            logger.debug("Ignoring helper cache for %s: %s", key_id, e)

    if not needs_refresh(cache, refresh_interval):
        logger.debug("Using cached API key for helper %s", key_id)
        return cache.secret.get_secret_value()

    logger.info("Fetching API key from api_key_helper %s", key_id)
    api_key = execute_helper(helper_cmd, ctx)

    if refresh_interval > 0:
        _store(helper_cmd, api_key)

    return api_key
