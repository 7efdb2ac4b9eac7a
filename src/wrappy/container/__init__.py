"""Container layout engine.

Creates, validates and loads container directories:

    <container-root>/
      manifest.json
      scripts/default.sh
      content/
      config/permissions.json
      config/environment.json
"""

from wrappy.container.builder import create_container_structure
from wrappy.container.errors import (
    ContainerError,
    ContainerExistsError,
    ContainerIOError,
    InvalidManifestError,
    InvalidVersionError,
    ScriptNotFoundError,
    StructuralViolationError,
)
from wrappy.container.loader import discover_containers, load_container
from wrappy.container.manifest import (
    Container,
    ContainerManifest,
    EnvironmentConfig,
    FilesystemAccess,
    ManifestPermissions,
    PermissionsConfig,
    build_default_manifest,
)
from wrappy.container.validator import (
    Severity,
    ValidationReport,
    Violation,
    ViolationKind,
    inspect_container_structure,
    validate_container_structure,
)
from wrappy.container.versioning import Version, parse_version

__all__ = [
    "Container",
    "ContainerError",
    "ContainerExistsError",
    "ContainerIOError",
    "ContainerManifest",
    "EnvironmentConfig",
    "FilesystemAccess",
    "InvalidManifestError",
    "InvalidVersionError",
    "ManifestPermissions",
    "PermissionsConfig",
    "ScriptNotFoundError",
    "Severity",
    "StructuralViolationError",
    "ValidationReport",
    "Version",
    "Violation",
    "ViolationKind",
    "build_default_manifest",
    "create_container_structure",
    "discover_containers",
    "inspect_container_structure",
    "load_container",
    "parse_version",
    "validate_container_structure",
]
