"""Tests for gitscribe.keyhelper cache, paths and models."""

import hashlib
import json
import stat
import sys
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from gitscribe.keyhelper import (
    CachedCredential,
    HelperCacheError,
    get_cache_dir,
    get_cache_file,
    get_cache_key,
    needs_refresh,
    read_cache,
    write_cache,
)


def _entry(age_seconds: float, command: str = "echo key") -> CachedCredential:
    return CachedCredential(
        secret="sk-test-key",
        fetched_at=datetime.now(timezone.utc) - timedelta(seconds=age_seconds),
        source_command=command,
    )


class TestCachePaths:
    """Tests for cache key and file path functions."""

    def test_cache_key_is_sha256_of_command(self):
        """Test that the cache key is the hex SHA-256 of the command."""
        key = get_cache_key("echo key")

        assert key == hashlib.sha256(b"echo key").hexdigest()
        assert len(key) == 64

    def test_cache_key_differs_per_command(self):
        """Test that different commands get different keys."""
        assert get_cache_key("echo a") != get_cache_key("echo b")

    def test_cache_key_is_stable(self):
        """Test that the same command always maps to the same key."""
        assert get_cache_key("op read op://x") == get_cache_key("op read op://x")

    def test_cache_file_lives_in_cache_dir(self, config_dir):
        """Test that cache files are <key>.json inside the cache dir."""
        cache_file = get_cache_file("echo key")

        assert cache_file.parent == get_cache_dir() == config_dir / ".cache"
        assert cache_file.name == f"{get_cache_key('echo key')}.json"


class TestCachedCredential:
    """Tests for the CachedCredential model."""

    def test_repr_masks_secret(self):
        """Test that the secret does not show up in repr or str."""
        entry = _entry(0)

        assert "sk-test-key" not in repr(entry)
        assert "sk-test-key" not in str(entry)

    def test_json_contains_secret(self):
        """Test that the JSON dump stores the real secret."""
        data = json.loads(_entry(0).model_dump_json())

        assert data["secret"] == "sk-test-key"
        assert data["source_command"] == "echo key"
        assert "fetched_at" in data

    def test_age_seconds(self):
        """Test age calculation against a reference time."""
        fetched = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        entry = CachedCredential(secret="k", fetched_at=fetched, source_command="c")

        assert entry.age_seconds(fetched + timedelta(seconds=90)) == 90

    def test_naive_timestamp_treated_as_utc(self):
        """Test that a naive fetched_at is interpreted as UTC."""
        entry = CachedCredential(
            secret="k",
            fetched_at=datetime(2024, 1, 1, 12, 0, 0),
            source_command="c",
        )
        now = datetime(2024, 1, 1, 12, 1, 0, tzinfo=timezone.utc)

        assert entry.age_seconds(now) == 60


    @pytest.mark.parametrize("secret", ["", "  \n\t"])
    def test_blank_secret_rejected(self, secret):
        """Test that an empty or whitespace-only secret fails validation."""
        with pytest.raises(ValidationError):
            CachedCredential(
                secret=secret,
                fetched_at=datetime.now(timezone.utc),
                source_command="c",
            )

    def test_secret_is_stripped(self):
        """Test that surrounding whitespace is removed from the secret."""
        entry = CachedCredential(
            secret="  sk-padded\n",
            fetched_at=datetime.now(timezone.utc),
            source_command="c",
        )

        assert entry.secret.get_secret_value() == "sk-padded"


class TestReadWriteCache:
    """Tests for read_cache and write_cache."""

    def test_read_returns_none_if_missing(self):
        """Test that a missing cache file means no entry."""
        assert read_cache("echo key") is None

    def test_write_then_read(self):
        """Test that a written entry can be read back."""
        write_cache("echo key", "sk-abc")

        entry = read_cache("echo key")

        assert entry is not None
        assert entry.secret.get_secret_value() == "sk-abc"
        assert entry.source_command == "echo key"
        assert entry.age_seconds() < 60

    def test_write_overwrites_previous_entry(self):
        """Test that each write replaces the file contents."""
        write_cache("echo key", "first-key")
        write_cache("echo key", "second-key")

        entry = read_cache("echo key")

        assert entry.secret.get_secret_value() == "second-key"
        assert "first-key" not in get_cache_file("echo key").read_text()

    def test_entries_are_isolated_per_command(self):
        """Test that two commands never share a cache entry."""
        write_cache("echo a", "key-a")
        write_cache("echo b", "key-b")

        assert read_cache("echo a").secret.get_secret_value() == "key-a"
        assert read_cache("echo b").secret.get_secret_value() == "key-b"

    def test_read_ignores_entry_for_other_command(self):
        """Test that an entry whose source_command differs is ignored."""
        write_cache("echo a", "key-a")
        other = get_cache_file("echo b")
        other.write_text(get_cache_file("echo a").read_text())

        assert read_cache("echo b") is None

    def test_corrupt_file_raises_cache_error(self):
        """Test that a corrupt cache file raises HelperCacheError."""
        cache_file = get_cache_file("echo key")
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text("{not json")

        with pytest.raises(HelperCacheError):
            read_cache("echo key")

    def test_undecodable_file_raises_cache_error(self):
        """Test that invalid UTF-8 in the cache file raises HelperCacheError."""
        cache_file = get_cache_file("echo key")
        cache_file.parent.mkdir(parents=True)
        cache_file.write_bytes(b"\xff\xfe\x00garbage")

        with pytest.raises(HelperCacheError):
            read_cache("echo key")

    def test_blank_secret_raises_cache_error(self):
        """Test that a stored empty secret is treated as a broken cache."""
        cache_file = get_cache_file("echo key")
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text(
            json.dumps(
                {
                    "secret": "",
                    "fetched_at": datetime.now(timezone.utc).isoformat(),
                    "source_command": "echo key",
                }
            )
        )

        with pytest.raises(HelperCacheError):
            read_cache("echo key")

    def test_write_refuses_blank_key(self):
        """Test that write_cache never stores an empty key."""
        with pytest.raises(HelperCacheError):
            write_cache("echo key", "   ")

        assert not get_cache_file("echo key").exists()

    def test_schema_error_does_not_leak_secret(self):
        """Test that a schema mismatch does not echo file contents."""
        cache_file = get_cache_file("echo key")
        cache_file.parent.mkdir(parents=True)
        cache_file.write_text(json.dumps({"secret": "leaky-secret", "fetched_at": "nope"}))

        with pytest.raises(HelperCacheError) as exc_info:
            read_cache("echo key")

        assert "leaky-secret" not in str(exc_info.value)

    def test_write_failure_raises_cache_error(self, mocker, temp_dir):
        """Test that an unwritable cache directory raises HelperCacheError."""
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")
        mocker.patch("gitscribe.keyhelper.paths._CACHE_DIR", blocker / ".cache")

        with pytest.raises(HelperCacheError):
            write_cache("echo key", "sk-abc")

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_cache_file_permissions(self):
        """Test that the cache file is 0600 and its directory 0700."""
        write_cache("echo key", "sk-abc")

        cache_file = get_cache_file("echo key")
        assert stat.S_IMODE(cache_file.stat().st_mode) == 0o600
        assert stat.S_IMODE(cache_file.parent.stat().st_mode) == 0o700

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_existing_file_permissions_are_tightened(self):
        """Test that rewriting a loose cache file restores 0600."""
        write_cache("echo key", "sk-abc")
        cache_file = get_cache_file("echo key")
        cache_file.chmod(0o644)

        write_cache("echo key", "sk-def")

        assert stat.S_IMODE(cache_file.stat().st_mode) == 0o600


class TestNeedsRefresh:
    """Tests for needs_refresh."""

    def test_missing_entry_needs_refresh(self):
        """Test that no entry always needs a refresh."""
        assert needs_refresh(None, 900) is True

    def test_fresh_entry(self):
        """Test that an entry younger than the interval is usable."""
        assert needs_refresh(_entry(10), 900) is False

    def test_expired_entry(self):
        """Test that an entry older than the interval is stale."""
        assert needs_refresh(_entry(1000), 900) is True

    def test_entry_at_interval_is_stale(self):
        """Test that an entry exactly at the interval is stale."""
        fetched = datetime.now(timezone.utc) - timedelta(seconds=900)
        entry = CachedCredential(secret="k", fetched_at=fetched, source_command="c")

        assert needs_refresh(entry, 900) is True

    def test_zero_interval_always_refreshes(self):
        """Test that an interval of 0 disables the cache."""
        assert needs_refresh(_entry(0), 0) is True
