"""Check a directory against the container layout contract.

Every check runs on every call and all findings are collected, so a single
validation reports every defect at once. Findings from the config directory
check are advisory: they are reported but never fail validation.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from wrappy.container.errors import StructuralViolationError
from wrappy.container.manifest import (
    CONFIG_DIR,
    CONTENT_DIR,
    DEFAULT_SCRIPT_FILE,
    MANIFEST_FILE,
    REQUIRED_FIELDS,
    SCRIPTS_DIR,
)

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Whether a violation fails validation."""

    REQUIRED = "required"
    ADVISORY = "advisory"


class ViolationKind(str, Enum):
    """What a violation is about; the CLI keys its fix hints on this."""

    MANIFEST_MISSING = "manifest_missing"
    MANIFEST_INVALID_JSON = "manifest_invalid_json"
    MANIFEST_UNREADABLE = "manifest_unreadable"
    MANIFEST_FIELD = "manifest_field"
    DIRECTORY_MISSING = "directory_missing"
    NOT_A_DIRECTORY = "not_a_directory"
    DIRECTORY_UNREADABLE = "directory_unreadable"
    SCRIPT_MISSING = "script_missing"


@dataclass(frozen=True)
class Violation:
    """A single deviation from the layout contract."""

    check: str
    kind: ViolationKind
    message: str
    severity: Severity = Severity.REQUIRED


@dataclass
class ValidationReport:
    """All findings for one directory."""

    path: Path
    violations: list[Violation] = field(default_factory=list)

    @property
    def errors(self) -> list[Violation]:
        return [v for v in self.violations if v.severity is Severity.REQUIRED]

    @property
    def warnings(self) -> list[Violation]:
        return [v for v in self.violations if v.severity is Severity.ADVISORY]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise StructuralViolationError listing every required violation."""
        if self.errors:
            raise StructuralViolationError(self.errors)


def check_manifest(container_path: Path) -> list[Violation]:
    """manifest.json must exist, parse, and carry the required fields."""
    manifest_path = container_path / MANIFEST_FILE

    def violation(kind: ViolationKind, message: str) -> Violation:
        return Violation(check="manifest", kind=kind, message=message)

    try:
        content = manifest_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return [violation(ViolationKind.MANIFEST_MISSING, "manifest.json is required")]
    except (OSError, UnicodeDecodeError) as e:
        return [
            violation(ViolationKind.MANIFEST_UNREADABLE, f"Failed to read manifest.json: {e}")
        ]

    try:
        manifest = json.loads(content, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return [
            violation(ViolationKind.MANIFEST_INVALID_JSON, "manifest.json contains invalid JSON")
        ]

    if not isinstance(manifest, dict):
        return [
            violation(ViolationKind.MANIFEST_FIELD, "manifest.json must contain a JSON object")
        ]

    return [
        violation(ViolationKind.MANIFEST_FIELD, message)
        for message in _manifest_field_errors(manifest)
    ]


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _manifest_field_errors(manifest: dict[str, Any]) -> list[str]:
    errors = []

    for name in REQUIRED_FIELDS:
        value = manifest.get(name)
        if not isinstance(value, str) or not value:
            errors.append(f'manifest.json: "{name}" is required and must be a string')

    # null counts as absent for the optional fields
    if manifest.get("scripts") is not None and not isinstance(manifest["scripts"], dict):
        errors.append('manifest.json: "scripts" must be an object')

    if manifest.get("dependencies") is not None and not isinstance(manifest["dependencies"], list):
        errors.append('manifest.json: "dependencies" must be an array')

    if manifest.get("permissions") is not None and not isinstance(manifest["permissions"], dict):
        errors.append('manifest.json: "permissions" must be an object')

    return errors


def check_scripts_directory(container_path: Path) -> list[Violation]:
    """scripts/ must be a directory holding default.sh."""
    violations = _check_directory(container_path, SCRIPTS_DIR, check="scripts")
    if violations:
        return violations

    # Existence only; mode and content are not checked
    if not (container_path / SCRIPTS_DIR / DEFAULT_SCRIPT_FILE).exists():
        violations.append(
            Violation(
                check="scripts",
                kind=ViolationKind.SCRIPT_MISSING,
                message=f"{SCRIPTS_DIR}/{DEFAULT_SCRIPT_FILE} is required",
            )
        )
    return violations


def check_content_directory(container_path: Path) -> list[Violation]:
    """content/ must be a directory."""
    return _check_directory(container_path, CONTENT_DIR, check="content")


def check_config_directory(container_path: Path) -> list[Violation]:
    """config/ should be a directory; findings are advisory only.

    The builder always creates config/, but its absence does not make a
    container invalid because the loader falls back to default config records.
    """
    return _check_directory(
        container_path, CONFIG_DIR, check="config", severity=Severity.ADVISORY
    )


def _check_directory(
    container_path: Path,
    name: str,
    check: str,
    severity: Severity = Severity.REQUIRED,
) -> list[Violation]:
    path = container_path / name
    try:
        is_dir = path.is_dir()
        exists = is_dir or path.exists()
    except OSError as e:
        return [
            Violation(
                check,
                ViolationKind.DIRECTORY_UNREADABLE,
                f"Failed to inspect {name}/: {e}",
                severity,
            )
        ]

    if not exists:
        if severity is Severity.ADVISORY:
            message = f"{name}/ directory is missing"
        else:
            message = f"{name}/ directory is required"
        return [Violation(check, ViolationKind.DIRECTORY_MISSING, message, severity)]

    if not is_dir:
        message = f"{name}/ must be a directory"
        return [Violation(check, ViolationKind.NOT_A_DIRECTORY, message, severity)]

    return []


CHECKS: tuple[Callable[[Path], list[Violation]], ...] = (
    check_manifest,
    check_scripts_directory,
    check_content_directory,
    check_config_directory,
)


def inspect_container_structure(container_path: str | Path) -> ValidationReport:
    """Run every check and return all findings without raising.

    Args:
        container_path: Directory to inspect

    Returns:
        Report holding required and advisory violations
    """
    path = Path(container_path)
    report = ValidationReport(path=path)

    for check in CHECKS:
        report.violations.extend(check(path))

    for warning in report.warnings:
        logger.warning("%s: %s", path, warning.message)

    if not report.is_valid:
        logger.info("Container at %s failed validation with %d error(s)", path, len(report.errors))

    return report


def validate_container_structure(container_path: str | Path) -> ValidationReport:
    """Validate a container directory.

    Args:
        container_path: Directory to validate

    Returns:
        The report, which may still carry advisory warnings

    Raises:
        StructuralViolationError: If manifest.json, scripts/ or content/ break
            the contract; the message lists every violation, one per line
    """
    report = inspect_container_structure(container_path)
    report.raise_for_errors()
    return report
