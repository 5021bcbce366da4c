"""pkgdeps exception hierarchy.

All public exceptions inherit from PkgDepsError, giving callers a single
base class to catch when they want to handle any pkgdeps-specific failure
without swallowing unrelated errors.
"""


class PkgDepsError(Exception):
    """Base exception for all pkgdeps errors."""


class ProjectConfigError(PkgDepsError):
    """Raised when the project file cannot be located or parsed.

    Covers a missing ``sfdx-project.json``, invalid JSON, and keys whose
    values do not have the expected shape.
    """


class DependencyDeclarationError(PkgDepsError):
    """Raised for a malformed dependency declaration.

    A malformed declaration aborts the whole walk; it is never skipped
    like a dependency that simply has no matching package version.
    """


class MissingDependentPackage(DependencyDeclarationError):
    """Raised when a dependency declaration names no target package."""

    def __init__(self, directory: str) -> None:
        super().__init__(
            f"Dependency declared in package directory {directory!r} "
            "has no package or packageId"
        )
        self.directory = directory


class InvalidVersionFormat(DependencyDeclarationError):
    """Raised when a version number is not ``major.minor.patch.build``."""

    def __init__(self, version_number: str) -> None:
        super().__init__(
            f"Invalid version number {version_number!r}: expected "
            "major.minor.patch.build with a numeric or LATEST build"
        )
        self.version_number = version_number


class MissingVersionNumber(DependencyDeclarationError):
    """Raised when a package-family dependency declares no version number."""

    def __init__(self, identifier: str) -> None:
        super().__init__(
            f"Dependency on package {identifier!r} has no versionNumber"
        )
        self.identifier = identifier


class CatalogUnavailable(PkgDepsError):
    """Raised when the package version catalog cannot be queried.

    Covers connection failures, timeouts, authentication errors and
    rejected queries. Never retried.
    """


class OrgSessionUnavailable(PkgDepsError):
    """Raised when the session for an org cannot be obtained from the CLI."""


class InstalledListUnavailable(PkgDepsError):
    """Raised when the installed package list of the target org is unavailable.

    Only the reconciliation step fails; resolved dependencies stay valid.
    """
