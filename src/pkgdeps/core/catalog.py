"""Resolution of dependency declarations to concrete package versions.

Defines the ``CatalogQuery`` abstract base class that concrete catalogs
(the DevHub Tooling API, in-memory test catalogs) implement, the
``CatalogFilter`` and ``CatalogRecord`` data models they exchange, and the
``CatalogResolver`` that turns an identifier plus version number into at
most one subscriber package version id.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from pkgdeps.core.identifiers import (
    ConcreteId,
    FamilyId,
    Unrecognized,
    classify_identifier,
)
from pkgdeps.core.version import parse_version_number
from pkgdeps.exceptions import MissingVersionNumber

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CatalogFilter:
    """Conjunctive clauses selecting package versions of one family.

    Attributes:
        family_id: Package family id (``0Ho...``) the versions belong to.
        major: Required major version.
        minor: Required minor version.
        patch: Required patch version.
        build: Required build number, or None to accept any build.
        namespaces: Accepted namespace prefixes, or None for any namespace.
        branch: Required branch, or None for any branch.
    """

    family_id: str
    major: int
    minor: int
    patch: int
    build: int | None = None
    namespaces: tuple[str, ...] | None = None
    branch: str | None = None

    def matches(self, record: CatalogRecord) -> bool:
        """Return True if *record* satisfies every clause of this filter."""
        if record.family_id is not None and record.family_id != self.family_id:
            return False
        if (record.major_version, record.minor_version, record.patch_version) != (
            self.major, self.minor, self.patch,
        ):
            return False
        if self.build is not None and record.build_number != self.build:
            return False
        if self.namespaces is not None and record.namespace not in self.namespaces:
            return False
        if self.branch is not None and record.branch != self.branch:
            return False
        return True


@dataclass(frozen=True)
class CatalogRecord:
    """A package version as reported by the catalog.

    Attributes:
        artifact_id: Subscriber package version id (``04t...``).
        major_version: Major version.
        minor_version: Minor version.
        patch_version: Patch version.
        build_number: Build number.
        namespace: Namespace prefix of the package family, if any.
        branch: Branch the version was built from, if any.
        family_id: Package family id, when the catalog reports it.
        is_released: Whether the version is promoted/released.
        is_password_protected: Whether installation requires a key.
    """

    artifact_id: str
    major_version: int
    minor_version: int
    patch_version: int
    build_number: int
    namespace: str | None = None
    branch: str | None = None
    family_id: str | None = None
    is_released: bool = False
    is_password_protected: bool = False


# ---------------------------------------------------------------------------
# Abstract catalog
# ---------------------------------------------------------------------------


class CatalogQuery(ABC):
    """Source of package version records.

    Implementations run exactly one lookup per ``query`` call and raise
    ``CatalogUnavailable`` when the lookup itself fails.
    """

    @abstractmethod
    async def query(self, clause: CatalogFilter) -> list[CatalogRecord]:
        """Return the records matching *clause*, highest build number first.

        Args:
            clause: Filter clauses, all of which must hold.

        Returns:
            Matching records; empty if none match.

        Raises:
            CatalogUnavailable: If the catalog cannot be queried.
        """


class InMemoryCatalog(CatalogQuery):
    """Catalog backed by a fixed list of records.

    Useful for offline runs and tests. Every call is recorded in
    ``queries``.
    """

    def __init__(self, records: Sequence[CatalogRecord] = ()) -> None:
        self._records = list(records)
        self.queries: list[CatalogFilter] = []

    async def query(self, clause: CatalogFilter) -> list[CatalogRecord]:
        self.queries.append(clause)
        matching = [r for r in self._records if clause.matches(r)]
        return sorted(matching, key=lambda r: r.build_number, reverse=True)


# ---------------------------------------------------------------------------
# CatalogResolver
# ---------------------------------------------------------------------------


def _clean_branch(branch: str | None) -> str | None:
    if branch is None:
        return None
    return branch.strip() or None


class CatalogResolver:
    """Resolves package identifiers to subscriber package version ids.

    Args:
        catalog: The catalog to query for package family versions.
    """

    def __init__(self, catalog: CatalogQuery) -> None:
        self._catalog = catalog

    @staticmethod
    def build_filter(
        family_id: str,
        version_number: str | None,
        namespaces: Sequence[str] | None = None,
        branch: str | None = None,
    ) -> CatalogFilter:
        """Build the catalog filter for a package family dependency.

        Raises:
            MissingVersionNumber: If *version_number* is None or blank.
            InvalidVersionFormat: If *version_number* is malformed.
        """
        if version_number is None or not version_number.strip():
            raise MissingVersionNumber(family_id)
        version = parse_version_number(version_number)
        return CatalogFilter(
            family_id=family_id,
            major=version.major,
            minor=version.minor,
            patch=version.patch,
            build=None if version.is_latest else int(version.build),
            namespaces=tuple(namespaces) if namespaces is not None else None,
            branch=_clean_branch(branch),
        )

    async def resolve_artifact(
        self,
        identifier: str,
        version_number: str | None,
        namespaces: Sequence[str] | None = None,
        branch: str | None = None,
    ) -> str | None:
        """Resolve an identifier to at most one subscriber package version id.

        Package version ids are returned as-is without querying. Package
        family ids trigger exactly one catalog query; the candidate with the
        highest build number wins. Identifiers of any other shape resolve to
        None.

        Args:
            identifier: Package family id, package version id, or other.
            version_number: Declared version number (required for families).
            namespaces: Accepted namespace prefixes, or None for any.
            branch: Required branch, or None for any.

        Returns:
            The subscriber package version id, or None if nothing matched.

        Raises:
            MissingVersionNumber: Family id declared without version number.
            InvalidVersionFormat: Malformed version number.
            CatalogUnavailable: The catalog query failed.
        """
        tagged = classify_identifier(identifier)

        if isinstance(tagged, ConcreteId):
            return tagged.value

        if isinstance(tagged, Unrecognized):
            logger.debug("Skipping %s: not a package or package version id", identifier)
            return None

        assert isinstance(tagged, FamilyId)
        clause = self.build_filter(tagged.value, version_number, namespaces, branch)
        candidates = await self._catalog.query(clause)
        if not candidates:
            logger.info(
                "No package version of %s matches %s", identifier, version_number,
            )
            return None

        best = sorted(candidates, key=lambda r: r.build_number, reverse=True)[0]
        logger.debug(
            "Resolved %s %s to %s (build %d)",
            identifier, version_number, best.artifact_id, best.build_number,
        )
        return best.artifact_id
