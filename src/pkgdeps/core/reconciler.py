"""Reconciliation of resolved dependencies against an org's installed packages."""

from __future__ import annotations

from collections.abc import Iterable, Set

from pkgdeps.core.models import ReconciledDependency, ResolvedDependency


def reconcile(
    resolved: Iterable[ResolvedDependency],
    installed: Set[str],
) -> list[ReconciledDependency]:
    """Classify each resolved dependency as installed or pending.

    Read-only: nothing is installed. Dependencies without an artifact id
    are left out; the order of the rest is preserved.

    Args:
        resolved: Resolved dependencies, in report order.
        installed: Subscriber package version ids installed in the org.

    Returns:
        One ``ReconciledDependency`` per resolved dependency with an
        artifact id.
    """
    return [
        ReconciledDependency(dependency=dep, is_installed=dep.artifact_id in installed)
        for dep in resolved
        if dep.artifact_id is not None
    ]


def pending(reconciled: Iterable[ReconciledDependency]) -> list[ResolvedDependency]:
    """Return the dependencies that still need to be installed."""
    return [r.dependency for r in reconciled if not r.is_installed]
