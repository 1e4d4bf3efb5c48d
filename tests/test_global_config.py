"""Tests for gitscribe.global_config module."""

import stat
import sys

import pytest
import yaml

from gitscribe.config import LLMProvider
from gitscribe.global_config import (
    DEFAULT_HELPER_REFRESH_INTERVAL,
    GlobalConfigError,
    flatten_config,
    get_active_provider,
    get_config_file_path,
    get_credential,
    get_credentials_file_path,
    get_git_settings,
    get_global_config_dir,
    get_helper_settings,
    get_value,
    initialize_default_config,
    is_configured,
    is_set,
    load_credentials,
    load_global_config,
    save_credential,
    save_global_config,
    set_value,
)


class TestConfigPaths:
    """Tests for config directory and file path functions."""

    def test_config_dir_is_patched(self, config_dir):
        """Test that the config dir points at the test directory."""
        assert get_global_config_dir() == config_dir

    def test_config_file_path(self, config_dir):
        """Test that the config file is config.yaml."""
        assert get_config_file_path() == config_dir / "config.yaml"

    def test_credentials_file_path(self, config_dir):
        """Test that the credentials file is named credentials."""
        assert get_credentials_file_path() == config_dir / "credentials"


class TestLoadSaveGlobalConfig:
    """Tests for loading and saving config.yaml."""

    def test_load_returns_empty_if_missing(self):
        """Test that a missing file yields an empty dict."""
        assert load_global_config() == {}

    def test_save_and_load(self):
        """Test that a saved config can be loaded back."""
        save_global_config({"openai": {"model": "gpt-4o"}})

        assert load_global_config() == {"openai": {"model": "gpt-4o"}}

    def test_load_invalid_yaml_raises(self, config_dir):
        """Test that a malformed file raises GlobalConfigError."""
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("openai: [unclosed")

        with pytest.raises(GlobalConfigError):
            load_global_config()

    def test_is_configured(self):
        """Test is_configured before and after saving."""
        assert is_configured() is False
        save_global_config({})
        assert is_configured() is True


class TestDottedKeys:
    """Tests for get_value, is_set and set_value."""

    def test_get_value(self, write_config):
        """Test reading a nested value."""
        write_config({"openai": {"model": "gpt-4o"}})

        assert get_value("openai.model") == "gpt-4o"

    def test_get_value_default(self):
        """Test that missing keys return the default."""
        assert get_value("openai.model", "fallback") == "fallback"

    def test_is_set_with_zero(self, write_config):
        """Test that a key set to 0 counts as set."""
        write_config({"openai": {"api_key_helper_refresh_interval": 0}})

        assert is_set("openai.api_key_helper_refresh_interval") is True
        assert is_set("gemini.api_key_helper_refresh_interval") is False

    def test_set_value_converts_types(self):
        """Test that values are stored with the key's type."""
        assert set_value("openai.max_tokens", "500") == 500
        assert set_value("openai.temperature", "0.2") == 0.2

        config = yaml.safe_load(get_config_file_path().read_text())
        assert config["openai"]["max_tokens"] == 500

    def test_set_value_list(self):
        """Test that list keys are split on commas."""
        assert set_value("git.exclude_list", "dist/*, *.min.js") == ["dist/*", "*.min.js"]

    def test_set_value_keeps_other_keys(self, write_config):
        """Test that setting a key does not drop the rest of the section."""
        write_config({"openai": {"model": "gpt-4o"}})

        set_value("openai.api_key_helper", "echo key")

        assert get_value("openai.model") == "gpt-4o"
        assert get_value("openai.api_key_helper") == "echo key"

    def test_set_value_unknown_key(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(GlobalConfigError, match="Unknown config key"):
            set_value("openai.nope", "1")

    def test_set_value_bad_type(self):
        """Test that values of the wrong type are rejected."""
        with pytest.raises(GlobalConfigError, match="Invalid value"):
            set_value("openai.max_tokens", "many")

    def test_set_value_invalid_provider(self):
        """Test that unknown providers are rejected."""
        with pytest.raises(GlobalConfigError, match="Invalid provider"):
            set_value("openai.provider", "mystery")

    def test_flatten_config(self):
        """Test flattening nested sections into dotted keys."""
        flat = flatten_config({"openai": {"model": "m", "top_p": 1.0}, "output": {"lang": "ja"}})

        assert flat == {"openai.model": "m", "openai.top_p": 1.0, "output.lang": "ja"}


class TestCredentials:
    """Tests for the credentials file."""

    def test_load_returns_empty_if_missing(self):
        """Test that a missing credentials file yields an empty dict."""
        assert load_credentials() == {}

    def test_save_and_get(self):
        """Test saving and reading a credential."""
        save_credential("OPENAI_API_KEY", "sk-123")

        assert get_credential("OPENAI_API_KEY") == "sk-123"
        assert get_credential("GROQ_API_KEY") is None

    def test_save_updates_existing(self):
        """Test that saving again replaces only that key."""
        save_credential("OPENAI_API_KEY", "sk-old")
        save_credential("GROQ_API_KEY", "gsk-1")
        save_credential("OPENAI_API_KEY", "sk-new")

        assert load_credentials() == {"OPENAI_API_KEY": "sk-new", "GROQ_API_KEY": "gsk-1"}

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_credentials_file_permissions(self):
        """Test that the credentials file is owner read/write only."""
        save_credential("OPENAI_API_KEY", "sk-123")

        mode = stat.S_IMODE(get_credentials_file_path().stat().st_mode)
        assert mode == 0o600


class TestActiveProvider:
    """Tests for get_active_provider."""

    def test_not_configured(self):
        """Test that no provider means None."""
        assert get_active_provider() is None

    def test_configured(self, write_config):
        """Test that a configured provider is returned as an enum."""
        write_config({"openai": {"provider": "gemini"}})

        assert get_active_provider() == LLMProvider.GEMINI

    def test_invalid(self, write_config):
        """Test that an unknown provider string means None."""
        write_config({"openai": {"provider": "mystery"}})

        assert get_active_provider() is None


class TestHelperSettings:
    """Tests for get_helper_settings."""

    def test_no_helper(self):
        """Test that no helper configured returns None."""
        assert get_helper_settings(LLMProvider.OPENAI) == (None, DEFAULT_HELPER_REFRESH_INTERVAL)

    def test_default_interval(self, write_config):
        """Test that a missing refresh interval uses the 15 minute default."""
        write_config({"openai": {"api_key_helper": "echo key"}})

        assert get_helper_settings(LLMProvider.OPENAI) == ("echo key", 900)

    def test_explicit_zero_interval(self, write_config):
        """Test that an explicit 0 is kept (cache disabled)."""
        write_config({"openai": {"api_key_helper": "echo key", "api_key_helper_refresh_interval": 0}})

        assert get_helper_settings(LLMProvider.OPENAI) == ("echo key", 0)

    def test_custom_interval(self, write_config):
        """Test that a configured interval is used."""
        write_config({"openai": {"api_key_helper": "echo key", "api_key_helper_refresh_interval": 60}})

        assert get_helper_settings(LLMProvider.OPENAI) == ("echo key", 60)

    def test_non_integer_interval_raises_config_error(self, write_config):
        """Test that a hand-edited interval such as '15m' is a config error."""
        write_config({"openai": {"api_key_helper": "echo key", "api_key_helper_refresh_interval": "15m"}})

        with pytest.raises(GlobalConfigError, match="api_key_helper_refresh_interval"):
            get_helper_settings(LLMProvider.OPENAI)

    def test_provider_section_wins(self, write_config):
        """Test that a provider's own helper wins over the openai one."""
        write_config({
            "openai": {"api_key_helper": "echo openai"},
            "anthropic": {"api_key_helper": "echo anthropic", "api_key_helper_refresh_interval": 30},
        })

        assert get_helper_settings(LLMProvider.ANTHROPIC) == ("echo anthropic", 30)

    def test_falls_back_to_openai_section(self, write_config):
        """Test that Gemini uses the openai helper when it has none."""
        write_config({"openai": {"api_key_helper": "echo openai", "api_key_helper_refresh_interval": 10}})

        assert get_helper_settings(LLMProvider.GEMINI) == ("echo openai", 10)

    def test_compatible_providers_use_openai_section(self, write_config):
        """Test that Azure and Groq read the openai section."""
        write_config({
            "openai": {"api_key_helper": "echo openai"},
            "gemini": {"api_key_helper": "echo gemini"},
        })

        assert get_helper_settings(LLMProvider.AZURE)[0] == "echo openai"
        assert get_helper_settings(LLMProvider.GROQ)[0] == "echo openai"


class TestGitSettings:
    """Tests for get_git_settings and default config."""

    def test_defaults(self):
        """Test defaults when the git section is missing."""
        settings = get_git_settings()

        assert settings["diff_unified"] == 3
        assert settings["exclude_list"] == []
        assert settings["template_file"] == ""

    def test_configured(self, write_config):
        """Test reading configured git settings."""
        write_config({"git": {"diff_unified": 5, "exclude_list": ["dist/*"]}})

        settings = get_git_settings()

        assert settings["diff_unified"] == 5
        assert settings["exclude_list"] == ["dist/*"]

    def test_initialize_default_config(self):
        """Test that the default config is written once."""
        initialize_default_config()

        config = load_global_config()
        assert config["openai"]["provider"] == "openai"
        assert config["git"]["diff_unified"] == 3
        assert config["output"]["lang"] == "en"

    def test_initialize_keeps_existing(self, write_config):
        """Test that an existing config is not overwritten."""
        write_config({"openai": {"model": "mine"}})

        initialize_default_config()

        assert load_global_config() == {"openai": {"model": "mine"}}
