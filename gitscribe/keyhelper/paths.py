"""Cache file path utilities for the API key helper.

Contains functions for getting paths to helper cache files:
- get_cache_dir: Get the per-user helper cache directory
- ensure_cache_dir: Create the cache directory with owner-only permissions
- get_cache_key: Compute the cache key for a helper command
- get_cache_file: Get path to the cache file for a helper command
"""

import hashlib
from pathlib import Path


_CACHE_DIR = Path.home() / ".config" / "gitscribe" / ".cache"


def get_cache_dir() -> Path:
    """Get the helper cache directory.

    Returns:
        Path to ~/.config/gitscribe/.cache/
    """
    return _CACHE_DIR


def ensure_cache_dir() -> Path:
    """Ensure the helper cache directory exists and is private to the owner.

    Returns:
        Path to ~/.config/gitscribe/.cache/
    """
    cache_dir = get_cache_dir()
    cache_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    return cache_dir


def get_cache_key(helper_cmd: str) -> str:
    """Compute the cache key for a helper command.

    Args:
        helper_cmd: The helper shell command.

    Returns:
        SHA256 hex digest of the command string.
    """
    return hashlib.sha256(helper_cmd.encode()).hexdigest()


def get_cache_file(helper_cmd: str) -> Path:
    """Return path to the cache file for a helper command.

    Args:
        helper_cmd: The helper shell command.

    Returns:
        Path to <sha256>.json inside the cache directory.
    """
    return get_cache_dir() / f"{get_cache_key(helper_cmd)}.json"
