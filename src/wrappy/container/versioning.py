"""Semantic version parsing for container manifests.

The validator only requires ``version`` to be a non-empty string; these
helpers are for callers that want to compare versions.
"""

from __future__ import annotations

from dataclasses import dataclass

from wrappy.container.errors import InvalidVersionError


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor.patch`` version."""

    major: int
    minor: int
    patch: int

    def is_compatible_with(self, other: Version) -> bool:
        """Same major version and not older than ``other``."""
        return self.major == other.major and self >= other

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> Version:
    """Parse a ``major.minor.patch`` string.

    Raises:
        InvalidVersionError: If the string has the wrong shape or a part is
            not a non-negative integer
    """
    parts = text.split(".")
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidVersionError(text)

    major, minor, patch = (int(p) for p in parts)
    return Version(major=major, minor=minor, patch=patch)
