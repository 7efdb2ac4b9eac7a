"""Tests for container version parsing."""

import pytest

from wrappy.container.errors import InvalidVersionError
from wrappy.container.versioning import Version, parse_version


class TestParseVersion:
    def test_valid(self):
        assert parse_version("1.2.3") == Version(major=1, minor=2, patch=3)
        assert parse_version("0.0.0") == Version(0, 0, 0)

    @pytest.mark.parametrize("text", ["", "1", "1.2", "1.2.3.4", "1.x.3", "v1.2.3", "-1.2.3"])
    def test_invalid(self, text):
        with pytest.raises(InvalidVersionError, match="Invalid container version format"):
            parse_version(text)

    def test_str(self):
        assert str(parse_version("10.20.30")) == "10.20.30"


class TestCompatibility:
    def test_same_major_newer_is_compatible(self):
        assert Version(1, 4, 0).is_compatible_with(Version(1, 2, 0))

    def test_same_version_is_compatible(self):
        assert Version(2, 0, 1).is_compatible_with(Version(2, 0, 1))

    def test_older_is_not_compatible(self):
        assert not Version(1, 1, 0).is_compatible_with(Version(1, 2, 0))

    def test_different_major_is_not_compatible(self):
        assert not Version(2, 0, 0).is_compatible_with(Version(1, 9, 9))

    def test_ordering(self):
        assert sorted([Version(1, 10, 0), Version(1, 2, 0), Version(0, 9, 9)]) == [
            Version(0, 9, 9),
            Version(1, 2, 0),
            Version(1, 10, 0),
        ]
