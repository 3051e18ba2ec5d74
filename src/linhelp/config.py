"""
Configuration management for lin-help.

Uses XDG base directories:
- Config: ~/.config/linhelp/config.toml
- Data: ~/.linhelp/entries.json (the saved commands)

Remote storage identity comes from the environment first, then config.toml.
"""

from pathlib import Path
from typing import Any
import os

from linhelp.errors import ConfigError

# XDG defaults
DEFAULT_CONFIG_HOME = Path.home() / ".config"
DEFAULT_DATA_HOME = Path.home() / ".linhelp"

ENTRIES_FILENAME = "entries.json"

# Environment variables
ENV_HOME = "LINHELP_HOME"
ENV_BUCKET = "LINHELP_BUCKET"
ENV_OBJECT_KEY = "LINHELP_OBJECT_KEY"
ENV_REMOTE_TOKEN = "LINHELP_REMOTE_TOKEN"
ENV_LOG_LEVEL = "LINHELP_LOG_LEVEL"


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/linhelp)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", DEFAULT_CONFIG_HOME))
    return base / "linhelp"


def get_linhelp_home() -> Path:
    """Get the data directory (~/.linhelp or LINHELP_HOME)."""
    if env_home := os.environ.get(ENV_HOME):
        return Path(env_home)
    return DEFAULT_DATA_HOME


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def get_entries_path() -> Path:
    """Get the path to entries.json."""
    return get_linhelp_home() / ENTRIES_FILENAME


def load_config() -> dict[str, Any]:
    """
    Load configuration from config.toml, layered over the defaults.

    Returns default config if file doesn't exist.
    Raises ConfigError if the file exists but can't be read or parsed.
    """
    config_path = get_config_path()
    config = get_default_config()

    if not config_path.exists():
        return config

    # Lazy import tomli only when needed
    import tomli

    try:
        with open(config_path, "rb") as f:
            loaded = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        raise ConfigError(f"unable to read config {config_path}: {e}") from e

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values

    return config


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "storage": {
            "remote": False,
        },
        "remote": {
            "timeout": 30.0,
            "conditional_writes": False,
        },
        "logging": {
            "level": "WARNING",
        },
    }


def use_remote(config: dict[str, Any], flag: bool | None = None) -> bool:
    """
    Decide between the local and the remote backend.

    An explicit CLI flag wins; otherwise [storage] remote decides.
    """
    if flag is not None:
        return flag
    return bool(config.get("storage", {}).get("remote", False))


def get_remote_settings(config: dict[str, Any]) -> dict[str, Any]:
    """
    Resolve the remote object identity and connection settings.

    Bucket and object key are read once, from LINHELP_BUCKET and
    LINHELP_OBJECT_KEY, falling back to [remote] bucket / object_key.
    The endpoint has no default and must be set as [remote] endpoint.
    """
    remote_config = config.get("remote", {})

    bucket = os.environ.get(ENV_BUCKET) or remote_config.get("bucket")
    key = os.environ.get(ENV_OBJECT_KEY) or remote_config.get("object_key")

    if not bucket or not key:
        raise ConfigError(
            "Remote storage not configured. "
            f"Set {ENV_BUCKET} and {ENV_OBJECT_KEY} env vars or add to config.toml"
        )

    endpoint = remote_config.get("endpoint")
    if not endpoint:
        raise ConfigError(
            "Remote storage endpoint not configured. Add [remote] endpoint to config.toml"
        )

    return {
        "endpoint": endpoint,
        "bucket": bucket,
        "key": key,
        "token": os.environ.get(ENV_REMOTE_TOKEN) or remote_config.get("token"),
        "timeout": float(remote_config.get("timeout", 30.0)),
        "conditional": bool(remote_config.get("conditional_writes", False)),
    }


def get_log_level(config: dict[str, Any] | None = None) -> str:
    """Get the logging level name (LINHELP_LOG_LEVEL or [logging] level)."""
    if env_level := os.environ.get(ENV_LOG_LEVEL):
        return env_level.upper()
    config = config or get_default_config()
    return str(config.get("logging", {}).get("level", "WARNING")).upper()
