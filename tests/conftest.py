"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def config_dir(tmp_path, mocker, monkeypatch):
    """Point the global config and helper cache at a temporary directory.

    Also clears provider API key variables so tests never pick up real keys.
    """
    config_dir = tmp_path / "gitscribe"
    mocker.patch("gitscribe.global_config._CONFIG_DIR", config_dir)
    mocker.patch("gitscribe.keyhelper.paths._CACHE_DIR", config_dir / ".cache")

    for env_var in (
        "OPENAI_API_KEY",
        "AZURE_OPENAI_API_KEY",
        "GEMINI_API_KEY",
        "ANTHROPIC_API_KEY",
        "GROQ_API_KEY",
    ):
        monkeypatch.delenv(env_var, raising=False)

    # load_config() mutates module-level settings; restore them after each test
    import gitscribe.config as _config

    for name in ("ACTIVE_PROVIDER", "ACTIVE_MODEL", "MAX_TOKENS", "TEMPERATURE", "TOP_P", "TIMEOUT"):
        monkeypatch.setattr(_config, name, getattr(_config, name))

    return config_dir


@pytest.fixture
def write_config(config_dir):
    """Write a config.yaml into the temporary config directory."""
    import yaml

    def _write(data: dict) -> Path:
        config_dir.mkdir(parents=True, exist_ok=True)
        config_file = config_dir / "config.yaml"
        config_file.write_text(yaml.dump(data))
        return config_file

    return _write


@pytest.fixture
def sample_diff():
    """Sample staged diff for testing."""
    return """diff --git a/app.py b/app.py
index 1234567..abcdefg 100644
--- a/app.py
+++ b/app.py
@@ -1,5 +1,8 @@
 def main():
-    print("old")
+    print("new")
+
+def helper():
+    return True
"""


@pytest.fixture
def mock_git_commands(mocker):
    """Mock subprocess.run for git commands."""
    mock_run = mocker.patch("subprocess.run")
    return mock_run
