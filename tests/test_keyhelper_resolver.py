"""Tests for gitscribe.keyhelper.resolver (resolve_api_key)."""

import json
import logging
import sys
from datetime import datetime, timedelta, timezone

import pytest

from gitscribe.keyhelper import (
    CachedCredential,
    HelperConfigError,
    HelperExecutionError,
    get_cache_file,
    read_cache,
    resolve_api_key,
    write_cache,
)

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="uses POSIX shell syntax"
)


def _write_aged_entry(command: str, secret: str, age_seconds: float) -> None:
    entry = CachedCredential(
        secret=secret,
        fetched_at=datetime.now(timezone.utc) - timedelta(seconds=age_seconds),
        source_command=command,
    )
    cache_file = get_cache_file(command)
    cache_file.parent.mkdir(parents=True, exist_ok=True)
    cache_file.write_text(entry.model_dump_json())


class TestResolveValidation:
    """Tests for invalid helper commands."""

    def test_empty_command_rejected_without_io(self, mocker):
        """Test that an empty command touches neither the cache nor a shell."""
        mock_read = mocker.patch("gitscribe.keyhelper.resolver.read_cache")
        mock_write = mocker.patch("gitscribe.keyhelper.resolver.write_cache")
        mock_executor = mocker.patch("gitscribe.keyhelper.resolver.get_executor")

        with pytest.raises(HelperConfigError):
            resolve_api_key("", 900)

        mock_read.assert_not_called()
        mock_write.assert_not_called()
        mock_executor.assert_not_called()


@posix_only
class TestResolveCaching:
    """Tests for the cache behaviour of resolve_api_key."""

    def test_cache_hit_skips_execution(self):
        """Test that a fresh cache entry is returned without running the helper."""
        # The command would fail if it ran
        write_cache("exit 1", "cached-key")

        assert resolve_api_key("exit 1", 900) == "cached-key"

    def test_miss_executes_and_caches(self):
        """Test that a cache miss runs the helper and stores the result."""
        assert resolve_api_key("echo sk-fresh", 900) == "sk-fresh"

        entry = read_cache("echo sk-fresh")
        assert entry.secret.get_secret_value() == "sk-fresh"

    def test_expired_entry_is_refreshed(self):
        """Test that a stale entry is replaced by a new helper result."""
        _write_aged_entry("echo new-key", "old-key", age_seconds=1000)

        assert resolve_api_key("echo new-key", 900) == "new-key"
        assert read_cache("echo new-key").secret.get_secret_value() == "new-key"

    def test_commands_do_not_share_entries(self):
        """Test that each helper command has its own cache entry."""
        assert resolve_api_key("echo key-a", 900) == "key-a"
        assert resolve_api_key("echo key-b", 900) == "key-b"
        assert resolve_api_key("echo key-a", 900) == "key-a"

    def test_zero_interval_always_executes(self):
        """Test that an interval of 0 ignores an existing fresh entry."""
        write_cache("echo live-key", "cached-key")

        assert resolve_api_key("echo live-key", 0) == "live-key"

    def test_zero_interval_does_not_write_cache(self):
        """Test that an interval of 0 never creates a cache file."""
        resolve_api_key("echo uncached", 0)

        assert not get_cache_file("echo uncached").exists()

    def test_corrupt_cache_falls_through(self):
        """Test that a corrupt cache file is ignored and rewritten."""
        cache_file = get_cache_file("echo repaired")
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text("garbage")

        assert resolve_api_key("echo repaired", 900) == "repaired"
        assert read_cache("echo repaired").secret.get_secret_value() == "repaired"

    def test_undecodable_cache_falls_through(self):
        """Test that a cache file with invalid UTF-8 bytes is ignored."""
        cache_file = get_cache_file("echo fresh")
        cache_file.parent.mkdir(parents=True)
        cache_file.write_bytes(b"\xff\xfe\x00garbage")

        assert resolve_api_key("echo fresh", 900) == "fresh"

    @pytest.mark.parametrize("stored", ["", "   \n"])
    def test_empty_cached_secret_runs_helper(self, stored):
        """Test that a fresh entry holding a blank secret is not returned."""
        cache_file = get_cache_file("echo real")
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text(
            json.dumps(
                {
                    "secret": stored,
                    "fetched_at": datetime.now(timezone.utc).isoformat(),
                    "source_command": "echo real",
                }
            )
        )

        assert resolve_api_key("echo real", 900) == "real"
        assert read_cache("echo real").secret.get_secret_value() == "real"

    def test_cache_write_failure_is_not_fatal(self, mocker, temp_dir):
        """Test that an unwritable cache still yields the key."""
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")
        mocker.patch("gitscribe.keyhelper.paths._CACHE_DIR", blocker / ".cache")

        assert resolve_api_key("echo sk-nowrite", 900) == "sk-nowrite"

    def test_failure_with_stale_cache_raises(self):
        """Test that a stale entry is not used when the helper fails."""
        _write_aged_entry("exit 2", "old-key", age_seconds=1000)

        with pytest.raises(HelperExecutionError):
            resolve_api_key("exit 2", 900)

    def test_secret_never_logged(self, caplog):
        """Test that neither the key nor the command is written to the log."""
        caplog.set_level(logging.DEBUG, logger="gitscribe")

        resolve_api_key("echo sk-log-secret", 900)
        resolve_api_key("echo sk-log-secret", 900)

        assert "sk-log-secret" not in caplog.text
