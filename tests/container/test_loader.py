"""Tests for loading containers from disk."""

import json
import logging
import shutil
from pathlib import Path

import pytest

from wrappy.container.builder import create_container_structure
from wrappy.container.errors import InvalidManifestError, StructuralViolationError
from wrappy.container.loader import discover_containers, load_container
from wrappy.container.manifest import EnvironmentConfig, PermissionsConfig


def test_round_trip(container_path: Path):
    container = load_container(container_path)

    assert container.path == container_path
    assert container.manifest.name == "app"
    assert container.manifest.version == "1.0.0"
    assert container.manifest.description == "d"
    assert container.manifest.scripts["default"] == "./scripts/default.sh"
    assert container.permissions == PermissionsConfig()
    assert container.environment.variables == {}
    assert container.environment.path == []
    assert container.environment.working_directory == "./content"


def test_default_script_resolves_inside_container(container_path: Path):
    container = load_container(container_path)
    assert container.default_script_path.resolve() == (
        container_path / "scripts" / "default.sh"
    ).resolve()
    assert container.default_script_path.exists()


def test_path_is_absolute(container_path: Path, monkeypatch):
    monkeypatch.chdir(container_path.parent)
    container = load_container("app")
    assert container.path.is_absolute()
    assert container.path == container_path


def test_validation_failure_propagates(container_path: Path):
    shutil.rmtree(container_path / "content")
    with pytest.raises(StructuralViolationError, match="content/ directory is required"):
        load_container(container_path)


def test_missing_permissions_uses_default(container_path: Path):
    (container_path / "config" / "permissions.json").unlink()

    container = load_container(container_path)

    assert container.permissions.model_dump() == {
        "api": [],
        "resources": [],
        "network": False,
        "filesystem": {"read": [], "write": []},
    }


def test_malformed_environment_uses_default(container_path: Path, caplog):
    (container_path / "config" / "environment.json").write_text("{ broken")

    with caplog.at_level(logging.DEBUG, logger="wrappy"):
        container = load_container(container_path)

    assert container.environment == EnvironmentConfig()
    assert "Using default config/environment.json" in caplog.text


def test_mistyped_permissions_uses_default(container_path: Path):
    (container_path / "config" / "permissions.json").write_text('{"network": "maybe"}')
    container = load_container(container_path)
    assert container.permissions.network is False


def test_missing_config_directory_loads_defaults(container_path: Path):
    shutil.rmtree(container_path / "config")

    container = load_container(container_path)

    assert container.permissions == PermissionsConfig()
    assert container.environment == EnvironmentConfig()


def test_custom_config_is_read(container_path: Path):
    (container_path / "config" / "permissions.json").write_text(
        json.dumps(
            {
                "api": ["notifications"],
                "resources": ["gpu"],
                "network": True,
                "filesystem": {"read": ["~/Documents"], "write": []},
            }
        )
    )
    (container_path / "config" / "environment.json").write_text(
        json.dumps(
            {
                "variables": {"MESSAGE": "Hello, World!"},
                "path": ["./bin"],
                "workingDirectory": "./content/app",
            }
        )
    )

    container = load_container(container_path)

    assert container.permissions.api == ["notifications"]
    assert container.permissions.network is True
    assert container.permissions.filesystem.read == ["~/Documents"]
    assert container.environment.variables == {"MESSAGE": "Hello, World!"}
    assert container.environment.path == ["./bin"]
    assert container.environment.working_directory == "./content/app"


def test_partial_config_is_filled_with_defaults(container_path: Path):
    (container_path / "config" / "permissions.json").write_text("{}")
    container = load_container(container_path)
    assert container.permissions == PermissionsConfig()


def test_manifest_that_does_not_fit_model(container_path: Path):
    (container_path / "manifest.json").write_text(
        json.dumps({"name": "app", "version": "1.0.0", "description": "d", "tags": "cli"})
    )
    with pytest.raises(InvalidManifestError):
        load_container(container_path)


def test_loads_are_independent(container_path: Path):
    first = load_container(container_path)
    manifest = json.loads((container_path / "manifest.json").read_text())
    manifest["description"] = "changed"
    (container_path / "manifest.json").write_text(json.dumps(manifest))

    second = load_container(container_path)

    assert first.manifest.description == "d"
    assert second.manifest.description == "changed"


class TestDiscoverContainers:
    def test_finds_valid_containers(self, tmp_path: Path):
        for name in ("zeta", "alpha"):
            create_container_structure(
                tmp_path, {"name": name, "version": "1.0.0", "description": name}
            )

        containers = discover_containers(tmp_path)

        assert [c.name for c in containers] == ["alpha", "zeta"]

    def test_skips_invalid_and_hidden(self, tmp_path: Path):
        create_container_structure(tmp_path, {"name": "good", "version": "1", "description": "d"})
        (tmp_path / "broken").mkdir()
        (tmp_path / ".staging").mkdir()
        (tmp_path / "notes.txt").write_text("")

        assert [c.name for c in discover_containers(tmp_path)] == ["good"]

    def test_missing_root(self, tmp_path: Path):
        assert discover_containers(tmp_path / "nope") == []


def test_bundled_example_loads():
    example = Path(__file__).parents[2] / "examples" / "hello-world"

    container = load_container(example)

    assert container.manifest.name == "hello-world"
    assert container.script_path("english").exists()
    assert container.environment.variables == {"MESSAGE": "Hello from wrappy!"}
