"""Exceptions raised by the container layout engine."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wrappy.container.validator import Violation


class ContainerError(Exception):
    """Base class for container layout errors."""


class InvalidManifestError(ContainerError):
    """A manifest is missing a required field or has a mistyped one."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class StructuralViolationError(ContainerError):
    """A directory does not satisfy the container contract.

    The message lists every required violation, one per line.
    """

    def __init__(self, violations: list[Violation]) -> None:
        self.violations = violations
        lines = "\n".join(v.message for v in violations)
        super().__init__(f"Container validation failed:\n{lines}")


class ContainerIOError(ContainerError):
    """Filesystem failure while building or reading a container."""

    def __init__(self, path: str | Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"I/O error at '{self.path}': {reason}")


class ContainerExistsError(ContainerError):
    """Atomic creation refused because the target directory already exists."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Container '{self.path.name}' already exists at {self.path}")


class ScriptNotFoundError(ContainerError):
    """A script name is not declared in the container's manifest."""

    def __init__(self, container: str, script: str) -> None:
        self.container = container
        self.script = script
        super().__init__(f"Script '{script}' not found in container '{container}'")


class InvalidVersionError(ContainerError):
    """A version string is not of the form major.minor.patch."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Invalid container version format: {version}")
