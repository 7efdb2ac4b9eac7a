"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from wrappy.container import create_container_structure


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch) -> Path:
    """Point WRAPPY_CONFIG at a file that does not exist, so tests never read ~/.wrappy."""
    path = tmp_path_factory.mktemp("config") / "wrappy.yaml"
    monkeypatch.setenv("WRAPPY_CONFIG", str(path))
    return path


@pytest.fixture
def minimal_manifest() -> dict:
    """The smallest manifest the builder accepts."""
    return {"name": "app", "version": "1.0.0", "description": "d"}


@pytest.fixture
def container_path(tmp_path: Path, minimal_manifest: dict) -> Path:
    """A freshly created, valid container."""
    return create_container_structure(tmp_path, minimal_manifest)
