"""Create the on-disk layout of a new container."""

from __future__ import annotations

import logging
import os
import shutil
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from wrappy.container.errors import ContainerExistsError, ContainerIOError, InvalidManifestError
from wrappy.container.manifest import (
    CONFIG_DIR,
    CONTENT_DIR,
    DEFAULT_SCRIPT_FILE,
    ENVIRONMENT_FILE,
    MANIFEST_FILE,
    PERMISSIONS_FILE,
    SCRIPTS_DIR,
    ContainerManifest,
    EnvironmentConfig,
    PermissionsConfig,
    build_default_manifest,
    check_required_fields,
)

logger = logging.getLogger(__name__)

DEFAULT_SCRIPT_BODY = """#!/bin/bash

# Default launch script for this container
echo "Starting container..."

# Start your application here, for example:
# cd content && npm start
# or
# ./content/app

echo "Container started"
"""

# rwxr-xr-x
SCRIPT_MODE = 0o755


def create_container_structure(
    base_path: str | Path,
    manifest_input: Mapping[str, Any] | ContainerManifest,
    atomic: bool = False,
) -> Path:
    """Create a container directory from a manifest.

    Lays out ``<base_path>/<name>/`` with manifest.json, scripts/default.sh,
    content/ and config/{permissions,environment}.json. The config files
    always get the default records; they are not derived from the manifest's
    own ``permissions`` or ``environment`` fields.

    Args:
        base_path: Directory the container is created in
        manifest_input: Partial manifest with at least name, version and
            description
        atomic: Stage every write in a temporary sibling directory and rename
            it into place, so a failure leaves nothing at the target. An
            existing target is an error in this mode. When False, directories
            are created idempotently and a failed write leaves partial output.

    Returns:
        Path of the container root

    Raises:
        InvalidManifestError: If a required field is missing or invalid; raised
            before anything is created
        ContainerExistsError: If ``atomic`` is set and the target exists
        ContainerIOError: If a filesystem operation fails
    """
    if isinstance(manifest_input, ContainerManifest):
        manifest_input = manifest_input.model_dump()

    check_required_fields(manifest_input)
    _check_name(manifest_input["name"])
    manifest = build_default_manifest(manifest_input)

    container_path = Path(base_path) / manifest.name

    if not atomic:
        _write_layout(container_path, manifest)
        logger.info("Created container '%s' at %s", manifest.name, container_path)
        return container_path

    if container_path.exists():
        raise ContainerExistsError(container_path)

    _mkdir(Path(base_path))
    staging = Path(base_path) / f".{manifest.name}.{uuid.uuid4().hex}.tmp"
    try:
        _write_layout(staging, manifest)
        try:
            os.rename(staging, container_path)
        except OSError as e:
            raise ContainerIOError(container_path, e) from e
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        raise

    logger.info("Created container '%s' at %s (atomic)", manifest.name, container_path)
    return container_path


def _check_name(name: str) -> None:
    """The name becomes a directory name, so it must be one path component."""
    # NUL is not valid in a path component
    if name in (".", "..") or "/" in name or "\x00" in name or (os.sep != "/" and os.sep in name):
        raise InvalidManifestError(
            f'Manifest field "name" must be a single path component, got {name!r}',
            field="name",
        )


def _write_layout(container_path: Path, manifest: ContainerManifest) -> None:
    for directory in (
        container_path,
        container_path / SCRIPTS_DIR,
        container_path / CONTENT_DIR,
        container_path / CONFIG_DIR,
    ):
        _mkdir(directory)

    _write_text(container_path / MANIFEST_FILE, manifest.to_json())

    script_path = container_path / SCRIPTS_DIR / DEFAULT_SCRIPT_FILE
    _write_text(script_path, DEFAULT_SCRIPT_BODY)
    try:
        script_path.chmod(SCRIPT_MODE)
    except OSError as e:
        raise ContainerIOError(script_path, e) from e

    config_path = container_path / CONFIG_DIR
    _write_text(config_path / PERMISSIONS_FILE, PermissionsConfig().to_json())
    _write_text(config_path / ENVIRONMENT_FILE, EnvironmentConfig().to_json())


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ContainerIOError(path, e) from e


def _write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ContainerIOError(path, e) from e
