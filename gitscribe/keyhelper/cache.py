"""API key helper cache operations.

Contains functions for caching helper results:
- read_cache: Load the cached key for a helper command
- write_cache: Save a freshly fetched key for a helper command
- needs_refresh: Check if a cached key is missing or stale

One JSON file is kept per distinct helper command. Files are written with
0600 permissions since they contain the key in plain text.
"""

import os
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from gitscribe.keyhelper.exceptions import HelperCacheError
from gitscribe.keyhelper.models import CachedCredential
from gitscribe.keyhelper.paths import ensure_cache_dir, get_cache_file


def read_cache(helper_cmd: str) -> Optional[CachedCredential]:
    """Load the cached key for a helper command.

    Args:
        helper_cmd: The helper shell command.

    Returns:
        The cached credential, or None if there is no cache file or the
        file belongs to a different command.

    Raises:
        HelperCacheError: If the file exists but cannot be read or parsed.
    """
    cache_file = get_cache_file(helper_cmd)

    if not cache_file.exists():
        return None

    try:
        entry = CachedCredential.model_validate_json(cache_file.read_bytes())
    except OSError as e:
        raise HelperCacheError(f"Failed to read helper cache {cache_file}: {e.strerror}") from e
    except ValidationError as e:
        # Validation messages echo the input, which would include the key
        raise HelperCacheError(
            f"Failed to parse helper cache {cache_file} ({e.error_count()} errors)"
        ) from None
    except ValueError:
        # Undecodable bytes
        raise HelperCacheError(f"Failed to decode helper cache {cache_file}") from None

    if entry.source_command != helper_cmd:
        return None

    return entry


def write_cache(helper_cmd: str, api_key: str) -> CachedCredential:
    """Save a freshly fetched key for a helper command.

    The file is overwritten as a whole and restricted to owner read/write.

    Args:
        helper_cmd: The helper shell command.
        api_key: The key the helper printed.

    Returns:
        The credential that was written.

    Raises:
        HelperCacheError: If the cache directory or file cannot be written.
    """
    try:
        entry = CachedCredential(
            secret=api_key,
            fetched_at=datetime.now(timezone.utc),
            source_command=helper_cmd,
        )
    except ValidationError:
        raise HelperCacheError("Refusing to cache an empty API key") from None

    cache_file = get_cache_file(helper_cmd)

    try:
        ensure_cache_dir()
        fd = os.open(cache_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            f.write(entry.model_dump_json(indent=2))
        # O_CREAT only applies the mode to new files
        os.chmod(cache_file, 0o600)
    except OSError as e:
        raise HelperCacheError(f"Failed to write helper cache {cache_file}: {e.strerror}") from e

    return entry


def needs_refresh(entry: Optional[CachedCredential], refresh_interval: float) -> bool:
    """Check if the cached key must be fetched again.

    Args:
        entry: The cached credential, or None.
        refresh_interval: Maximum age in seconds. 0 disables caching.

    Returns:
        True if the helper has to run, False if the cached key is usable.
    """
    if entry is None:
        return True

    # Always refresh if interval is 0
    if refresh_interval <= 0:
        return True

    return entry.age_seconds() >= refresh_interval
