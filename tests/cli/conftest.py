"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest
import yaml


@pytest.fixture
def containers_dir(tmp_path: Path, isolated_config: Path) -> Path:
    """Configure containers.root_dir to a temporary directory."""
    root = tmp_path / "containers"
    isolated_config.write_text(yaml.safe_dump({"containers": {"root_dir": str(root)}}))
    return root
