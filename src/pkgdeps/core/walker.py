"""Traversal of the project's package directories.

The walker decides which package directories are in scope, resolves every
dependency they declare (alias first, then catalog), and remembers which
requested package names never matched a directory.

Resolution of the declarations of one directory may run concurrently
(``max_concurrency > 1``). Results are always reported in declaration order
and the first fatal error cancels the outstanding resolutions.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence

from pkgdeps.core.catalog import CatalogResolver
from pkgdeps.core.identifiers import AliasResolver, Unrecognized, classify_identifier
from pkgdeps.core.models import (
    DependencyDeclaration,
    PackageDirectoryRecord,
    ResolvedDependency,
    UnresolvedDependency,
    WalkResult,
)
from pkgdeps.exceptions import MissingDependentPackage

logger = logging.getLogger(__name__)


class DependencyWalker:
    """Resolves the dependencies declared by a project's package directories.

    Args:
        aliases: Alias resolver built from the project's package aliases.
        resolver: Catalog resolver used for every declaration.
        max_concurrency: Upper bound on simultaneous catalog resolutions
            within one package directory. 1 resolves strictly in sequence.
    """

    def __init__(
        self,
        aliases: AliasResolver,
        resolver: CatalogResolver,
        *,
        max_concurrency: int = 1,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._aliases = aliases
        self._resolver = resolver
        self._max_concurrency = max_concurrency

    async def walk(
        self,
        directories: Iterable[PackageDirectoryRecord],
        package_filter: Iterable[str] = (),
        namespace_filter: Sequence[str] | None = None,
        branch: str | None = None,
    ) -> WalkResult:
        """Walk the package directories and resolve their dependencies.

        Args:
            directories: Package directory records in project order.
            package_filter: Package names to restrict the walk to. Empty
                means every directory is considered.
            namespace_filter: Accepted namespace prefixes, or None.
            branch: Required package version branch, or None.

        Returns:
            A ``WalkResult`` with resolved dependencies in
            directory-then-declaration order, the unmatched filter names and
            the declarations that resolved to nothing.

        Raises:
            MissingDependentPackage: A declaration names no package.
            MissingVersionNumber: A package family declared without version.
            InvalidVersionFormat: A malformed version number.
            CatalogUnavailable: The catalog could not be queried.
        """
        wanted = set(package_filter)
        remaining = set(wanted)
        result = WalkResult()

        for directory in directories:
            if wanted and directory.declared_package_name not in wanted:
                continue

            if directory.dependencies:
                logger.info(
                    "Package dependencies found for package directory %s",
                    directory.path,
                )
                await self._walk_directory(directory, namespace_filter, branch, result)
            else:
                logger.info(
                    "No dependencies found for package directory %s", directory.path,
                )

            remaining.discard(directory.declared_package_name)

        result.unmatched_filters = remaining
        for name in sorted(remaining):
            logger.warning(
                "Package %s was requested but not found in the package directories",
                name,
            )
        return result

    async def _walk_directory(
        self,
        directory: PackageDirectoryRecord,
        namespace_filter: Sequence[str] | None,
        branch: str | None,
        result: WalkResult,
    ) -> None:
        for declaration in directory.dependencies:
            if not declaration.dependent_package:
                raise MissingDependentPackage(directory.path)

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def _bounded(declaration: DependencyDeclaration) -> str | None:
            async with semaphore:
                return await self._resolve(declaration, namespace_filter, branch)

        tasks = [
            asyncio.ensure_future(_bounded(declaration))
            for declaration in directory.dependencies
        ]
        try:
            artifacts = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        for declaration, artifact_id in zip(directory.dependencies, artifacts):
            assert declaration.dependent_package is not None
            if artifact_id is None:
                result.unresolved.append(
                    UnresolvedDependency(
                        directory=directory.path,
                        declaration=declaration,
                        reason=self._miss_reason(declaration.dependent_package),
                    )
                )
                continue
            resolved = ResolvedDependency(
                dependent_package=declaration.dependent_package,
                version_number=declaration.version_number,
                artifact_id=artifact_id,
            )
            logger.info("    %s : %s", artifact_id, resolved.label)
            result.resolved.append(resolved)

    async def _resolve(
        self,
        declaration: DependencyDeclaration,
        namespace_filter: Sequence[str] | None,
        branch: str | None,
    ) -> str | None:
        assert declaration.dependent_package is not None
        identifier = self._aliases.resolve(declaration.dependent_package)
        return await self._resolver.resolve_artifact(
            identifier, declaration.version_number, namespace_filter, branch,
        )

    def _miss_reason(self, dependent_package: str) -> str:
        identifier = self._aliases.resolve(dependent_package)
        if isinstance(classify_identifier(identifier), Unrecognized):
            return "unrecognized"
        return "no-match"
