"""Load and save wrappy.yaml."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from wrappy.config.schema import WrappyConfig


DEFAULT_CONFIG_PATH = Path.home() / ".wrappy" / "wrappy.yaml"

# Overrides DEFAULT_CONFIG_PATH when set
CONFIG_PATH_ENV = "WRAPPY_CONFIG"


class ConfigError(Exception):
    """wrappy.yaml could not be read or does not match the schema."""


def default_config_path() -> Path:
    """Config location, honoring the WRAPPY_CONFIG environment variable."""
    override = os.environ.get(CONFIG_PATH_ENV)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> WrappyConfig:
    """Load wrappy configuration.

    A missing or empty file yields the defaults, so wrappy works without any
    configuration.

    Args:
        path: Config file. Defaults to :func:`default_config_path`.

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file exists but cannot be read, is not YAML, or
            fails validation
    """
    if path is None:
        path = default_config_path()

    if not path.exists():
        return WrappyConfig()

    try:
        with open(path, "r") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            return WrappyConfig()

        return WrappyConfig(**config_data)

    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e
    except (OSError, TypeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e


def save_config(config: WrappyConfig, path: Optional[Union[str, Path]] = None) -> None:
    """Write configuration as YAML, creating the parent directory.

    Args:
        config: Configuration to save
        path: Destination. Defaults to :func:`default_config_path`.
    """
    if path is None:
        path = default_config_path()
    elif isinstance(path, str):
        path = Path(path)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def containers_root(config: WrappyConfig) -> Path:
    """The configured container root with ``~`` expanded."""
    return Path(config.containers.root_dir).expanduser()
