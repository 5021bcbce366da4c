"""Dependency resolution and reconciliation engine.

Turns the dependencies declared by a project's package directories into
concrete subscriber package version ids and classifies them against the
packages installed in an org. All public names are re-exported here so
callers can write ``from pkgdeps.core import X``.
"""

from pkgdeps.core.catalog import (
    CatalogFilter,
    CatalogQuery,
    CatalogRecord,
    CatalogResolver,
    InMemoryCatalog,
)
from pkgdeps.core.identifiers import (
    PACKAGE_FAMILY_PREFIX,
    PACKAGE_VERSION_PREFIX,
    AliasResolver,
    ConcreteId,
    FamilyId,
    PackageIdentifier,
    Unrecognized,
    classify_identifier,
)
from pkgdeps.core.models import (
    DependencyDeclaration,
    PackageDirectoryRecord,
    ReconciledDependency,
    ResolvedDependency,
    UnresolvedDependency,
    WalkResult,
)
from pkgdeps.core.reconciler import pending, reconcile
from pkgdeps.core.version import LATEST, VersionDescriptor, parse_version_number
from pkgdeps.core.walker import DependencyWalker

__all__ = [
    "PACKAGE_FAMILY_PREFIX",
    "PACKAGE_VERSION_PREFIX",
    "LATEST",
    "AliasResolver",
    "CatalogFilter",
    "CatalogQuery",
    "CatalogRecord",
    "CatalogResolver",
    "ConcreteId",
    "DependencyDeclaration",
    "DependencyWalker",
    "FamilyId",
    "InMemoryCatalog",
    "PackageDirectoryRecord",
    "PackageIdentifier",
    "ReconciledDependency",
    "ResolvedDependency",
    "Unrecognized",
    "UnresolvedDependency",
    "VersionDescriptor",
    "WalkResult",
    "classify_identifier",
    "parse_version_number",
    "pending",
    "reconcile",
]
