"""Configuration management for ghacli."""

import json
import os
from pathlib import Path
from typing import Dict, Optional

# Keys accepted by `ghacli config set`, with their allowed values (None = free-form)
KNOWN_KEYS: Dict[str, Optional[tuple]] = {
    "host": None,
    "repo": None,
    "prompt": ("enabled", "disabled"),
}


def get_config_file_path() -> Path:
    """Get the path to the ghacli configuration file."""
    # Use XDG_CONFIG_HOME if set, otherwise use ~/.config
    if "XDG_CONFIG_HOME" in os.environ:
        config_dir = Path(os.environ["XDG_CONFIG_HOME"]) / "ghacli"
    else:
        config_dir = Path.home() / ".config" / "ghacli"

    return config_dir / "config.json"


def load_config() -> Dict[str, str]:
    """Load configuration from the config file.

    Returns:
        Dictionary containing configuration values
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        # If config file is corrupted or unreadable, return empty config
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: Dict[str, str]) -> None:
    """Save configuration to the config file.

    Args:
        config: Dictionary containing configuration values to save
    """
    config_file = get_config_file_path()

    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        raise RuntimeError(f"Failed to save configuration: {e}")


def get_config_value(key: str) -> Optional[str]:
    """Return a single configuration value, or None if unset."""
    return load_config().get(key)


def set_config_value(key: str, value: str) -> None:
    """Set a configuration value.

    Args:
        key: One of KNOWN_KEYS
        value: Value to store

    Raises:
        ValueError: If the key is unknown or the value is not allowed
    """
    if key not in KNOWN_KEYS:
        raise ValueError(f"unknown configuration key '{key}'")
    allowed = KNOWN_KEYS[key]
    if allowed and value not in allowed:
        raise ValueError(f"invalid value '{value}' for '{key}'; valid values: {', '.join(allowed)}")
    config = load_config()
    config[key] = value
    save_config(config)


def remove_config_value(key: str) -> bool:
    """Remove a configuration value. Returns True if something was removed."""
    config = load_config()
    if key not in config:
        return False
    del config[key]
    save_config(config)
    return True


def is_prompt_disabled() -> bool:
    """Return True if prompting has been turned off in the config file."""
    return get_config_value("prompt") == "disabled"
