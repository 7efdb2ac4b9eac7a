"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml

from wrappy.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    containers_root,
    default_config_path,
    load_config,
    save_config,
)
from wrappy.config.schema import WrappyConfig


def test_default_config():
    """Test that default config has expected values."""
    config = WrappyConfig()

    assert config.containers.root_dir == "~/.wrappy/containers"
    assert config.containers.atomic_create is False
    assert config.logging.level == "WARNING"


def test_containers_config_keys():
    assert set(WrappyConfig().containers.model_dump()) == {"root_dir", "atomic_create"}


def test_load_config_nonexistent_returns_defaults(tmp_path: Path):
    config = load_config(tmp_path / "nonexistent.yaml")
    assert config == WrappyConfig()


def test_load_config_empty_file_returns_defaults(tmp_path: Path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")

    assert load_config(config_path) == WrappyConfig()


def test_load_config_partial_override(tmp_path: Path):
    config_path = tmp_path / "partial.yaml"
    config_path.write_text(yaml.safe_dump({"containers": {"atomic_create": True}}))

    config = load_config(config_path)

    assert config.containers.atomic_create is True
    assert config.containers.root_dir == "~/.wrappy/containers"


def test_load_config_invalid_yaml(tmp_path: Path):
    config_path = tmp_path / "invalid.yaml"
    config_path.write_text("{ invalid yaml: [")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(config_path)


def test_load_config_validation_error(tmp_path: Path):
    config_path = tmp_path / "invalid_values.yaml"
    config_path.write_text(yaml.safe_dump({"logging": {"level": "LOUD"}}))

    with pytest.raises(ConfigError, match="validation failed"):
        load_config(config_path)


def test_load_config_not_a_mapping(tmp_path: Path):
    config_path = tmp_path / "list.yaml"
    config_path.write_text("- a\n- b\n")

    with pytest.raises(ConfigError, match="Failed to load config"):
        load_config(config_path)


def test_save_and_load_config(tmp_path: Path):
    config_path = tmp_path / "nested" / "wrappy.yaml"

    saved = WrappyConfig()
    saved.containers.root_dir = "/srv/containers"
    saved.logging.level = "DEBUG"

    save_config(saved, str(config_path))
    loaded = load_config(config_path)

    assert loaded.containers.root_dir == "/srv/containers"
    assert loaded.logging.level == "DEBUG"


def test_load_config_uses_env_override(isolated_config: Path):
    isolated_config.write_text(yaml.safe_dump({"containers": {"root_dir": "/opt/wrappy"}}))

    assert default_config_path() == isolated_config
    assert load_config().containers.root_dir == "/opt/wrappy"


def test_default_config_path_without_env(monkeypatch):
    monkeypatch.delenv("WRAPPY_CONFIG")
    assert default_config_path() == DEFAULT_CONFIG_PATH


def test_containers_root_expands_user():
    config = WrappyConfig()
    assert containers_root(config) == Path("~/.wrappy/containers").expanduser()
