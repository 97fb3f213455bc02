"""Application configuration stored as JSON in a per-user directory."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Union

DEFAULT_CONFIG_DIR_NAME = ".documcp"
CONFIG_FILE_NAME = "config.json"
INDEXES_DIR_NAME = "indexes"
CONNECTIONS_DIR_NAME = "connections"
PROCESSES_DIR_NAME = "processes"
ENV_PREFIX = "DOCUMCP_"

DEFAULT_APP_NAME = "documcp"
DEFAULT_VERSION = "0.1.0"

PathLike = Union[str, "os.PathLike[str]"]


class ConfigError(Exception):
    """Raised when the configuration cannot be located, read, written or validated."""


@dataclass
class Config:
    """Application configuration."""

    app_name: str = DEFAULT_APP_NAME
    version: str = DEFAULT_VERSION

    def validate(self) -> None:
        """Raise ConfigError if a required field is empty."""
        if not self.app_name:
            raise ConfigError("app_name must not be empty")
        if not self.version:
            raise ConfigError("version must not be empty")

    def apply_env_overrides(self) -> None:
        """Override fields from DOCUMCP_* environment variables that are set and non-empty."""
        app_name = os.environ.get(ENV_PREFIX + "APP_NAME")
        if app_name:
            self.app_name = app_name
        version = os.environ.get(ENV_PREFIX + "VERSION")
        if version:
            self.version = version

    def to_dict(self) -> dict[str, str]:
        """Return the JSON representation of the configuration."""
        return {"app_name": self.app_name, "version": self.version}

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Build a configuration from decoded JSON; absent fields are left empty."""
        if not isinstance(data, Mapping):
            raise ConfigError("config must be a JSON object")
        values: dict[str, str] = {}
        for key in ("app_name", "version"):
            value = data.get(key)
            if value is None:
                values[key] = ""
            elif isinstance(value, str):
                values[key] = value
            else:
                raise ConfigError(f"{key} must be a string")
        return cls(**values)


def get_default_config_dir() -> Path:
    """Return the default configuration directory in the user's home."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError(f"cannot determine home directory: {exc}") from exc
    return home / DEFAULT_CONFIG_DIR_NAME


def ensure_config_dir(directory: PathLike) -> None:
    """Create the configuration directory and its subdirectories if missing."""
    base = Path(directory)
    for path in (
        base,
        base / INDEXES_DIR_NAME,
        base / CONNECTIONS_DIR_NAME,
        base / PROCESSES_DIR_NAME,
    ):
        try:
            path.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"failed to create config dir {path}: {exc}") from exc


def load_config(directory: PathLike) -> Config:
    """Load config.json from the directory, creating a default one if it is missing."""
    ensure_config_dir(directory)
    path = Path(directory) / CONFIG_FILE_NAME
    try:
        with path.open(encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"config decode error: {exc}") from exc
    except FileNotFoundError:
        config = Config()
        config.apply_env_overrides()
        config.validate()
        save_config(directory, config)
        return config
    except OSError as exc:
        raise ConfigError(f"config open error: {exc}") from exc

    config = Config.from_dict(data)
    config.apply_env_overrides()
    config.validate()
    return config


def save_config(directory: PathLike, config: Config) -> None:
    """Write the configuration to config.json in the directory."""
    path = Path(directory) / CONFIG_FILE_NAME
    try:
        path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"config create error: {exc}") from exc


def get_indexes_dir(config_dir: PathLike) -> Path:
    """Return the indexes directory inside the configuration directory."""
    return Path(config_dir) / INDEXES_DIR_NAME


def get_connections_dir(config_dir: PathLike) -> Path:
    """Return the connections directory inside the configuration directory."""
    return Path(config_dir) / CONNECTIONS_DIR_NAME


def get_processes_dir(config_dir: PathLike) -> Path:
    """Return the processes directory inside the configuration directory."""
    return Path(config_dir) / PROCESSES_DIR_NAME