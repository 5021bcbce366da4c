"""Version number parsing for package dependencies.

Dependency version numbers have exactly four dot-separated components,
``major.minor.patch.build``. The build component may be the wildcard
``LATEST``, meaning "the highest build of major.minor.patch".
"""

from __future__ import annotations

from dataclasses import dataclass

from pkgdeps.exceptions import InvalidVersionFormat

LATEST = "LATEST"


@dataclass(frozen=True)
class VersionDescriptor:
    """A parsed ``major.minor.patch.build`` version number.

    Attributes:
        major: Major version.
        minor: Minor version.
        patch: Patch version.
        build: Build number, or the literal ``"LATEST"``.
    """

    major: int
    minor: int
    patch: int
    build: int | str

    @property
    def is_latest(self) -> bool:
        """True when the build component is the ``LATEST`` wildcard."""
        return self.build == LATEST

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}.{self.build}"


def _parse_component(raw: str, version_number: str) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise InvalidVersionFormat(version_number)
    return int(raw)


def parse_version_number(version_number: str) -> VersionDescriptor:
    """Parse a dependency version number.

    Args:
        version_number: Version string such as "1.2.3.4" or "1.2.3.LATEST".

    Returns:
        The parsed ``VersionDescriptor``.

    Raises:
        InvalidVersionFormat: If the string does not have exactly four
            components, or a component other than a ``LATEST`` build is not
            a non-negative integer.
    """
    parts = version_number.strip().split(".")
    if len(parts) != 4:
        raise InvalidVersionFormat(version_number)

    major, minor, patch = (_parse_component(p, version_number) for p in parts[:3])
    build: int | str
    if parts[3] == LATEST:
        build = LATEST
    else:
        build = _parse_component(parts[3], version_number)
    return VersionDescriptor(major=major, minor=minor, patch=patch, build=build)
