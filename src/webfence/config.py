"""
Configuration and path management for webfence.
"""

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigError

# Environment variable to override the config file location
CONFIG_PATH_ENV = "WEBFENCE_CONFIG"


@dataclass
class WebfenceConfig:
    """Main configuration."""

    # Site shown in the wrapper view
    start_url: str | None = None
    headless: bool = False

    # Filtering
    filter_list_path: str | None = None  # Extra fragments, one or more per line
    extra_fragments: list[str] = field(default_factory=list)
    replace_default_fragments: bool = False  # Drop the seed list

    @classmethod
    def load(cls, path: Path | None = None) -> "WebfenceConfig":
        """Load configuration from file."""
        if path is None:
            path = get_config_path()

        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config file {path}: expected a JSON object")

        extra_fragments = data.get("extra_fragments", [])
        if not isinstance(extra_fragments, list) or not all(
            isinstance(f, str) for f in extra_fragments
        ):
            raise ConfigError("extra_fragments must be a list of strings")

        return cls(
            start_url=_get_optional_str(data, "start_url"),
            headless=_get_bool(data, "headless", False),
            filter_list_path=_get_optional_str(data, "filter_list_path"),
            extra_fragments=extra_fragments,
            replace_default_fragments=_get_bool(data, "replace_default_fragments", False),
        )

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = get_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "start_url": self.start_url,
            "headless": self.headless,
            "filter_list_path": self.filter_list_path,
            "extra_fragments": self.extra_fragments,
            "replace_default_fragments": self.replace_default_fragments,
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)


def _get_optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{key} must be a string")
    return value


def _get_bool(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false")
    return value

def get_config_dir() -> Path:
    """Get config directory following platform conventions."""
    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    return base / "webfence"


def get_config_path() -> Path:
    """Get the config file path.

    Priority:
    1. WEBFENCE_CONFIG environment variable
    2. config.json in the platform config directory
    """
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.json"
