"""Container manifest and configuration models."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wrappy.container.errors import InvalidManifestError, InvalidVersionError, ScriptNotFoundError
from wrappy.container.versioning import Version, parse_version

MANIFEST_FILE = "manifest.json"
SCRIPTS_DIR = "scripts"
CONTENT_DIR = "content"
CONFIG_DIR = "config"
DEFAULT_SCRIPT_FILE = "default.sh"
PERMISSIONS_FILE = "permissions.json"
ENVIRONMENT_FILE = "environment.json"

DEFAULT_SCRIPT_NAME = "default"
DEFAULT_SCRIPT_PATH = "./scripts/default.sh"

# Checked in this order; the first failure is the one reported at creation
REQUIRED_FIELDS = ("name", "version", "description")


class ManifestPermissions(BaseModel):
    """Permissions declared inside manifest.json.

    Keys other than ``api`` and ``resources`` are kept as supplied.
    """

    model_config = ConfigDict(extra="allow")

    api: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)


class ContainerManifest(BaseModel):
    """The manifest.json document describing a container."""

    model_config = ConfigDict(extra="allow")

    name: str
    version: str
    description: str = ""
    author: str = ""
    tags: list[str] = Field(default_factory=list)
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: list[Any] = Field(default_factory=list)
    permissions: ManifestPermissions = Field(default_factory=ManifestPermissions)
    environment: dict[str, str] = Field(default_factory=dict)

    def semver(self) -> Version | None:
        """Parsed version, or None if ``version`` is not major.minor.patch."""
        try:
            return parse_version(self.version)
        except InvalidVersionError:
            return None

    def to_json(self) -> str:
        """Pretty-printed JSON as written to manifest.json."""
        return json.dumps(self.model_dump(mode="json"), indent=2, ensure_ascii=False)


class FilesystemAccess(BaseModel):
    """Paths a container may read or write."""

    read: list[str] = Field(default_factory=list)
    write: list[str] = Field(default_factory=list)


class PermissionsConfig(BaseModel):
    """config/permissions.json."""

    api: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)
    network: bool = False
    filesystem: FilesystemAccess = Field(default_factory=FilesystemAccess)

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json"), indent=2)


class EnvironmentConfig(BaseModel):
    """config/environment.json."""

    model_config = ConfigDict(populate_by_name=True)

    variables: dict[str, str] = Field(default_factory=dict)
    path: list[str] = Field(default_factory=list)
    working_directory: str = Field(default="./content", alias="workingDirectory")

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json", by_alias=True), indent=2)


@dataclass
class Container:
    """A container read back from disk.

    Built fresh by every load; nothing here is cached or shared.
    """

    path: Path
    manifest: ContainerManifest
    permissions: PermissionsConfig
    environment: EnvironmentConfig

    @property
    def name(self) -> str:
        return self.manifest.name

    @property
    def scripts_path(self) -> Path:
        return self.path / SCRIPTS_DIR

    @property
    def content_path(self) -> Path:
        return self.path / CONTENT_DIR

    @property
    def config_path(self) -> Path:
        return self.path / CONFIG_DIR

    def script_path(self, script_name: str) -> Path:
        """Resolve a declared script name to a path inside the container.

        Raises:
            ScriptNotFoundError: If the manifest does not declare the script
        """
        relative = self.manifest.scripts.get(script_name)
        if relative is None:
            raise ScriptNotFoundError(self.manifest.name, script_name)
        return self.path / relative

    @property
    def default_script_path(self) -> Path:
        return self.script_path(DEFAULT_SCRIPT_NAME)


def check_required_fields(data: Mapping[str, Any]) -> None:
    """Raise InvalidManifestError for the first missing or non-string field."""
    for field in REQUIRED_FIELDS:
        value = data.get(field)
        if not isinstance(value, str) or not value:
            raise InvalidManifestError(
                f'Manifest field "{field}" is required and must be a string',
                field=field,
            )


def build_default_manifest(data: Mapping[str, Any] | ContainerManifest) -> ContainerManifest:
    """Merge a partial manifest with defaults.

    Caller-supplied scripts and permissions are layered over the defaults, so
    ``scripts["default"]`` is always present in the result unless the caller
    overrides its path.

    Args:
        data: Partial manifest with at least name, version and description

    Returns:
        Complete manifest

    Raises:
        InvalidManifestError: If a required field is missing or not a string
    """
    if isinstance(data, ContainerManifest):
        data = data.model_dump()

    check_required_fields(data)

    try:
        return ContainerManifest(
            name=data["name"],
            version=data["version"],
            description=data["description"],
            author=data.get("author") or "",
            tags=data.get("tags") or [],
            scripts={DEFAULT_SCRIPT_NAME: DEFAULT_SCRIPT_PATH, **(data.get("scripts") or {})},
            dependencies=data.get("dependencies") or [],
            permissions={"api": [], "resources": [], **(data.get("permissions") or {})},
            environment=data.get("environment") or {},
        )
    except (TypeError, ValidationError) as e:
        raise InvalidManifestError(f"Invalid manifest: {e}") from e
