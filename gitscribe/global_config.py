"""Global configuration management for gitscribe.

Handles user-level configuration stored in ~/.config/gitscribe/:
- config.yaml: Provider, model, git, output and api_key_helper settings
- credentials: Static API keys for LLM providers
"""

import os
import stat
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from gitscribe.config import HELPER_CONFIG_SECTIONS, LLMProvider


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".config" / "gitscribe"

# Default interval for refreshing helper API keys, in seconds
DEFAULT_HELPER_REFRESH_INTERVAL = 900

# Keys accepted by 'gitscribe config set'
AVAILABLE_KEYS = {
    "openai.provider": str,
    "openai.model": str,
    "openai.base_url": str,
    "openai.api_version": str,
    "openai.timeout": float,
    "openai.max_tokens": int,
    "openai.temperature": float,
    "openai.top_p": float,
    "openai.frequency_penalty": float,
    "openai.presence_penalty": float,
    "openai.proxy": str,
    "openai.socks": str,
    "openai.skip_verify": bool,
    "openai.headers": list,
    "openai.api_key_helper": str,
    "openai.api_key_helper_refresh_interval": int,
    "gemini.api_key_helper": str,
    "gemini.api_key_helper_refresh_interval": int,
    "anthropic.api_key_helper": str,
    "anthropic.api_key_helper_refresh_interval": int,
    "git.diff_unified": int,
    "git.exclude_list": list,
    "git.template_file": str,
    "git.template_string": str,
    "output.lang": str,
    "output.file": str,
    "prompt.folder": str,
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off"}


def get_global_config_dir() -> Path:
    """Get the global gitscribe configuration directory.

    Returns:
        Path to ~/.config/gitscribe/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.config/gitscribe/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.config/gitscribe/config.yaml
    """
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to credentials file.

    Returns:
        Path to ~/.config/gitscribe/credentials
    """
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.config/gitscribe/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
        return config
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.config/gitscribe/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def _lookup(config: Dict[str, Any], key: str) -> Tuple[bool, Any]:
    node: Any = config
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return False, None
        node = node[part]
    return True, node


def is_set(key: str) -> bool:
    """Check whether a dotted key is present in config.yaml.

    Args:
        key: Dotted key such as "openai.api_key_helper_refresh_interval".

    Returns:
        True if the key exists, even if its value is 0 or empty.
    """
    found, _ = _lookup(load_global_config(), key)
    return found


def get_value(key: str, default: Any = None) -> Any:
    """Get a value from config.yaml by dotted key.

    Args:
        key: Dotted key such as "openai.model".
        default: Value returned when the key is missing.

    Returns:
        The configured value or default.
    """
    found, value = _lookup(load_global_config(), key)
    return value if found else default


def parse_bool(value: Any) -> bool:
    """Interpret a config value such as true, "yes" or "0" as a boolean.

    Raises:
        ValueError: If the value is not a recognised boolean.
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _coerce(key: str, value: str) -> Any:
    value_type = AVAILABLE_KEYS[key]
    try:
        if value_type is bool:
            return parse_bool(value)
        if value_type is list:
            return [item.strip() for item in value.split(",") if item.strip()]
        return value_type(value)
    except ValueError:
        raise GlobalConfigError(f"Invalid value for {key}: {value!r} is not a valid {value_type.__name__}")


def set_value(key: str, value: str) -> Any:
    """Set a dotted key in config.yaml.

    Args:
        key: One of AVAILABLE_KEYS.
        value: The value as typed on the command line.

    Returns:
        The converted value that was stored.

    Raises:
        GlobalConfigError: If the key is unknown or the value has the wrong type.
    """
    if key not in AVAILABLE_KEYS:
        raise GlobalConfigError(
            f"Unknown config key: {key}\nAvailable keys: {', '.join(AVAILABLE_KEYS)}"
        )

    if key == "openai.provider":
        try:
            LLMProvider(value)
        except ValueError:
            valid = ", ".join(p.value for p in LLMProvider)
            raise GlobalConfigError(f"Invalid provider: {value}. Valid providers: {valid}")

    converted = _coerce(key, value)

    config = load_global_config()
    section, _, name = key.partition(".")
    if not isinstance(config.get(section), dict):
        config[section] = {}
    config[section][name] = converted
    save_global_config(config)
    return converted


def flatten_config(config: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested config sections into dotted keys.

    Args:
        config: Nested configuration dictionary.
        prefix: Key prefix used for recursion.

    Returns:
        Dictionary mapping dotted keys to values.
    """
    flat = {}
    for key, value in config.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten_config(value, prefix=f"{full_key}."))
        else:
            flat[full_key] = value
    return flat


def load_credentials() -> Dict[str, str]:
    """Load API keys from ~/.config/gitscribe/credentials.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    credentials = {}

    try:
        with open(credentials_file, "r") as f:
            for line in f:
                line = line.strip()
                # Skip empty lines and comments
                if not line or line.startswith("#"):
                    continue

                # Parse KEY=value format
                if "=" in line:
                    key, value = line.split("=", 1)
                    credentials[key.strip()] = value.strip()

        return credentials
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")


def save_credential(provider_key: str, api_key: str) -> None:
    """Save or update an API key in the credentials file.

    Args:
        provider_key: Environment variable name (e.g., "OPENAI_API_KEY")
        api_key: The API key value.
    """
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    existing_creds = load_credentials()
    existing_creds[provider_key] = api_key

    # Write back all credentials
    try:
        with open(credentials_file, "w") as f:
            f.write("# gitscribe API credentials\n")
            f.write("# This file stores API keys for LLM providers\n")
            f.write("# Format: PROVIDER_API_KEY=your_key_here\n\n")

            for key, value in existing_creds.items():
                f.write(f"{key}={value}\n")

        # Set secure permissions (owner read/write only)
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)

    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(provider_key: str) -> Optional[str]:
    """Get an API key from credentials file.

    Args:
        provider_key: Environment variable name (e.g., "OPENAI_API_KEY")

    Returns:
        The API key if found, None otherwise.
    """
    credentials = load_credentials()
    return credentials.get(provider_key)


def get_active_provider() -> Optional[LLMProvider]:
    """Get the active LLM provider from global config.

    Returns:
        LLMProvider enum value, or None if not configured.
    """
    provider_str = get_value("openai.provider")

    if not provider_str:
        return None

    try:
        return LLMProvider(provider_str)
    except ValueError:
        return None


def get_helper_settings(provider: LLMProvider) -> Tuple[Optional[str], int]:
    """Get the api_key_helper command and refresh interval for a provider.

    The provider's own config section wins. Gemini and Anthropic fall back
    to the openai section's helper when they have none.

    Args:
        provider: The LLM provider.

    Returns:
        Tuple of (helper command or None, refresh interval in seconds).
        A missing refresh interval means the 15 minute default; an explicit
        0 disables the cache.

    Raises:
        GlobalConfigError: If the refresh interval is not an integer.
    """
    sections = [HELPER_CONFIG_SECTIONS[provider]]
    if sections[0] != "openai":
        sections.append("openai")

    for section in sections:
        helper_cmd = get_value(f"{section}.api_key_helper")
        if not helper_cmd:
            continue

        interval_key = f"{section}.api_key_helper_refresh_interval"
        if is_set(interval_key):
            # User explicitly set a value (could be 0 to disable cache)
            raw_interval = get_value(interval_key)
            try:
                refresh_interval = int(raw_interval or 0)
            except (TypeError, ValueError):
                raise GlobalConfigError(
                    f"Invalid value for {interval_key}: {raw_interval!r} is not a valid int"
                ) from None
        else:
            refresh_interval = DEFAULT_HELPER_REFRESH_INTERVAL
        return str(helper_cmd), refresh_interval

    return None, DEFAULT_HELPER_REFRESH_INTERVAL


def get_git_settings() -> Dict[str, Any]:
    """Get the git section of config.yaml.

    Returns:
        Dictionary with diff_unified, exclude_list, template_file and
        template_string (missing keys are filled with defaults).
    """
    git_section = get_value("git", {}) or {}
    return {
        "diff_unified": git_section.get("diff_unified", 3),
        "exclude_list": git_section.get("exclude_list", []) or [],
        "template_file": git_section.get("template_file", ""),
        "template_string": git_section.get("template_string", ""),
    }


def initialize_default_config() -> None:
    """Initialize config.yaml with default values if it doesn't exist."""
    config_file = get_config_file_path()

    if config_file.exists():
        return

    ensure_global_config_dir()

    default_config = {
        "openai": {
            "provider": "openai",
            "model": "gpt-4o-mini",
            "timeout": 30,
            "max_tokens": 300,
            "temperature": 1.0,
            "top_p": 1.0,
        },
        "git": {
            "diff_unified": 3,
            "exclude_list": [],
            "template_file": "",
            "template_string": "",
        },
        "output": {
            "lang": "en",
            "file": "",
        },
    }

    save_global_config(default_config)


def is_configured() -> bool:
    """Check if gitscribe has been configured.

    Returns:
        True if config.yaml exists, False otherwise.
    """
    return get_config_file_path().exists()


def get_transport_settings() -> Dict[str, Any]:
    """Get the HTTP transport settings shared by all LLM providers.

    Returns:
        Dictionary with proxy (HTTP(S) proxy URL or None), socks (SOCKS5
        address or None), skip_verify (bool) and headers (list of
        KEY=value strings).

    Raises:
        GlobalConfigError: If openai.skip_verify is not a boolean.
    """
    openai_section = get_value("openai", {}) or {}

    raw_skip_verify = openai_section.get("skip_verify", False)
    try:
        skip_verify = parse_bool(raw_skip_verify)
    except ValueError:
        raise GlobalConfigError(
            f"Invalid value for openai.skip_verify: {raw_skip_verify!r} is not a valid bool"
        ) from None

    headers = openai_section.get("headers") or []
    if isinstance(headers, str):
        headers = headers.split(",")

    return {
        "proxy": openai_section.get("proxy") or None,
        "socks": openai_section.get("socks") or None,
        "skip_verify": skip_verify,
        "headers": [str(item) for item in headers],
    }
