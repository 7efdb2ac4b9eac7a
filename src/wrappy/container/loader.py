"""Load containers from disk into the in-memory model.

Every call re-reads the directory; nothing is cached between calls.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from wrappy.container.errors import ContainerError, ContainerIOError, InvalidManifestError
from wrappy.container.manifest import (
    CONFIG_DIR,
    ENVIRONMENT_FILE,
    MANIFEST_FILE,
    PERMISSIONS_FILE,
    Container,
    ContainerManifest,
    EnvironmentConfig,
    PermissionsConfig,
)
from wrappy.container.validator import validate_container_structure

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ConfigFile(Generic[ModelT]):
    """An optional config file that falls back to a default record.

    A missing, unreadable or malformed file never fails a load; ``fallback``
    supplies the value instead.
    """

    relative_path: str
    model: type[ModelT]
    fallback: Callable[[], ModelT]

    def read(self, container_path: Path) -> ModelT:
        path = container_path / self.relative_path
        try:
            return self.model.model_validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.debug("Using default %s for %s: %s", self.relative_path, container_path, e)
            return self.fallback()


PERMISSIONS_CONFIG = ConfigFile(
    relative_path=f"{CONFIG_DIR}/{PERMISSIONS_FILE}",
    model=PermissionsConfig,
    fallback=PermissionsConfig,
)

ENVIRONMENT_CONFIG = ConfigFile(
    relative_path=f"{CONFIG_DIR}/{ENVIRONMENT_FILE}",
    model=EnvironmentConfig,
    fallback=EnvironmentConfig,
)


def load_container(container_path: str | Path) -> Container:
    """Load a container after validating its structure.

    Args:
        container_path: Container root directory

    Returns:
        The container, anchored at the absolute form of ``container_path``

    Raises:
        StructuralViolationError: If the directory fails validation
        InvalidManifestError: If manifest.json passes validation but does not
            fit the manifest model
        ContainerIOError: If manifest.json cannot be read
    """
    path = Path(container_path).absolute()

    validate_container_structure(path)

    manifest = _read_manifest(path)
    permissions = PERMISSIONS_CONFIG.read(path)
    environment = ENVIRONMENT_CONFIG.read(path)

    return Container(
        path=path,
        manifest=manifest,
        permissions=permissions,
        environment=environment,
    )


def _read_manifest(container_path: Path) -> ContainerManifest:
    manifest_path = container_path / MANIFEST_FILE
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ContainerIOError(manifest_path, e) from e

    try:
        return ContainerManifest.model_validate(json.loads(content))
    except (json.JSONDecodeError, ValidationError) as e:
        raise InvalidManifestError(f"Invalid manifest at {manifest_path}: {e}") from e


def discover_containers(root: str | Path) -> list[Container]:
    """Load every valid container directly under ``root``.

    Directories that fail to load are skipped and logged.

    Args:
        root: Directory holding container directories

    Returns:
        Loaded containers sorted by manifest name
    """
    root = Path(root).expanduser()
    if not root.is_dir():
        return []

    containers = []
    for entry in sorted(root.iterdir()):
        if not entry.is_dir() or entry.name.startswith("."):
            continue

        try:
            containers.append(load_container(entry))
        except ContainerError as e:
            logger.info("Skipping %s: %s", entry, e)

    return sorted(containers, key=lambda c: c.name)
