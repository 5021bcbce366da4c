"""Data models for dependency resolution and reconciliation.

Pure data holders (dataclasses) with no business logic, safe to import
from every other module without circular-dependency concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Project inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DependencyDeclaration:
    """A dependency declared by a package directory.

    Represents: "this package directory depends on ``dependent_package`` at
    ``version_number``".

    Attributes:
        dependent_package: Alias, package id (``0Ho``) or subscriber package
            version id (``04t``) of the required package. ``None`` or empty
            only for malformed declarations.
        version_number: Version as authored (e.g. "1.2.3.LATEST"), or None.
    """

    dependent_package: str | None
    version_number: str | None = None

    @property
    def label(self) -> str:
        """Human-readable "package version" label used in reports."""
        name = self.dependent_package or ""
        if self.version_number is None:
            return name
        return f"{name} {self.version_number}"


@dataclass(frozen=True)
class PackageDirectoryRecord:
    """One entry of the project's package directories.

    Attributes:
        path: Directory path as configured (e.g. "force-app").
        declared_package_name: Value of the directory's ``package`` key, or
            the empty string when the directory is not a package.
        dependencies: Declarations in authored order.
    """

    path: str
    declared_package_name: str = ""
    dependencies: tuple[DependencyDeclaration, ...] = ()


# ---------------------------------------------------------------------------
# Resolution outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolvedDependency:
    """A declaration resolved to a concrete subscriber package version.

    Attributes:
        dependent_package: The package as declared (alias or identifier).
        version_number: The version as declared, or None.
        artifact_id: The resolved subscriber package version id (``04t``).
    """

    dependent_package: str
    version_number: str | None
    artifact_id: str | None

    @property
    def label(self) -> str:
        if self.version_number is None:
            return self.dependent_package
        return f"{self.dependent_package} {self.version_number}"


@dataclass(frozen=True)
class UnresolvedDependency:
    """A declaration for which no package version could be selected.

    Attributes:
        directory: Path of the package directory declaring the dependency.
        declaration: The declaration itself.
        reason: ``"no-match"`` when the catalog had no candidate,
            ``"unrecognized"`` when the identifier has an unknown shape.
    """

    directory: str
    declaration: DependencyDeclaration
    reason: str


@dataclass
class WalkResult:
    """Outcome of walking the project's package directories.

    Attributes:
        resolved: Resolved dependencies in directory-then-declaration order.
        unmatched_filters: Requested package names that matched no directory.
        unresolved: Declarations that resolved to no package version.
    """

    resolved: list[ResolvedDependency] = field(default_factory=list)
    unmatched_filters: set[str] = field(default_factory=set)
    unresolved: list[UnresolvedDependency] = field(default_factory=list)


@dataclass(frozen=True)
class ReconciledDependency:
    """A resolved dependency classified against the installed set."""

    dependency: ResolvedDependency
    is_installed: bool
