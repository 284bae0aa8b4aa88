"""Configuration management for the CLI."""

import os
from pathlib import Path
from typing import Any

import yaml

from devnotes.notes.storage import DEFAULT_SNAPSHOT_NAME

DEFAULTS: dict[str, Any] = {
    "data_dir": None,
    "snapshot_name": DEFAULT_SNAPSHOT_NAME,
    "default_author": "",
}


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}") from e
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "devnotes" / "config.yaml")

        # Project config
        paths.append(Path(".devnotes.yaml"))
        paths.append(Path("devnotes.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result: dict[str, Any] = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def load_config(extra: Path | None = None) -> dict[str, Any]:
    """Load configuration from defaults, files and environment variables.

    Args:
        extra: Explicit config file, applied after the default locations

    Raises:
        ValueError: If the explicit config file is invalid
    """
    config = dict(DEFAULTS)

    # Default locations are optional; a broken one is skipped
    for path in Config.get_config_paths():
        if path.exists():
            try:
                config = Config.merge_configs(config, Config.from_file(path))
            except ValueError:
                continue

    if extra is not None:
        config = Config.merge_configs(config, Config.from_file(extra))

    env_overrides = {}
    if data_dir := os.environ.get("DEVNOTES_DATA_DIR"):
        env_overrides["data_dir"] = data_dir
    if author := os.environ.get("DEVNOTES_AUTHOR"):
        env_overrides["default_author"] = author

    return Config.merge_configs(config, env_overrides)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
