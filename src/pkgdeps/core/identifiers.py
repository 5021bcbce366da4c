"""Package identifiers and alias resolution.

Identifiers come in two recognized shapes, told apart by their key prefix:

- ``0Ho`` -- a package family (``Package2``), stable across versions.
- ``04t`` -- a concrete subscriber package version, directly installable.

The shape is determined once by :func:`classify_identifier` and carried as a
tagged variant, so callers dispatch on the type instead of re-checking
prefixes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

PACKAGE_FAMILY_PREFIX = "0Ho"
PACKAGE_VERSION_PREFIX = "04t"


# ---------------------------------------------------------------------------
# Tagged identifier variant
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FamilyId:
    """Identifier of a package family (``0Ho...``)."""

    value: str


@dataclass(frozen=True)
class ConcreteId:
    """Identifier of an installable package version (``04t...``)."""

    value: str


@dataclass(frozen=True)
class Unrecognized:
    """Identifier of neither known shape (e.g. an unpackaged build artifact)."""

    value: str


PackageIdentifier = FamilyId | ConcreteId | Unrecognized


def classify_identifier(identifier: str) -> PackageIdentifier:
    """Tag an identifier with its shape based on its prefix.

    Args:
        identifier: Package family id, package version id, or anything else.

    Returns:
        ``ConcreteId``, ``FamilyId`` or ``Unrecognized``.
    """
    if identifier.startswith(PACKAGE_VERSION_PREFIX):
        return ConcreteId(identifier)
    if identifier.startswith(PACKAGE_FAMILY_PREFIX):
        return FamilyId(identifier)
    return Unrecognized(identifier)


# ---------------------------------------------------------------------------
# AliasResolver
# ---------------------------------------------------------------------------


class AliasResolver:
    """Maps package aliases to the identifiers they stand for.

    The alias map is copied into a read-only view at construction and never
    changes afterwards. Names that are not aliases resolve to themselves.

    Args:
        aliases: Mapping of alias name to package identifier, usually the
            project's ``packageAliases``.
    """

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self._aliases: Mapping[str, str] = MappingProxyType(dict(aliases or {}))

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def resolve(self, name: str) -> str:
        """Return the identifier for *name*, or *name* itself if not an alias."""
        return self._aliases.get(name, name)

    def __contains__(self, name: object) -> bool:
        return name in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)
