"""Rich output formatting helpers for the pkgdeps CLI.

Provides consistent terminal output for resolution results, unmatched
package filters and installation status, plus the JSON document printed by
``--format json``.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pkgdeps.config import CheckSettings
from pkgdeps.core.models import (
    ReconciledDependency,
    ResolvedDependency,
    UnresolvedDependency,
    WalkResult,
)

_REASON_TEXT: dict[str, str] = {
    "no-match": "no matching package version",
    "unrecognized": "not a package or package version id",
}

console = Console()


def print_filters(settings: CheckSettings) -> None:
    """Echo the active package, namespace and branch filters."""
    if settings.packages:
        console.print(f"Filtering by packages: {', '.join(sorted(settings.packages))}")
    if settings.namespaces:
        console.print(f"Filtering by namespaces: {', '.join(settings.namespaces)}")
    if settings.branch:
        console.print(f"Filtering by branch: {settings.branch}")


def print_walk_result(result: WalkResult) -> None:
    """Print resolved and unresolved dependencies and unmatched filters.

    Args:
        result: Outcome of the dependency walk.
    """
    if result.resolved:
        table = Table(title="Resolved Dependencies", show_header=True, header_style="bold")
        table.add_column("Package Version Id", style="bold", no_wrap=True)
        table.add_column("Package")
        table.add_column("Version", style="dim")
        for dep in result.resolved:
            table.add_row(dep.artifact_id or "-", dep.dependent_package, dep.version_number or "-")
        console.print(table)
    else:
        console.print("[dim]No package dependencies resolved.[/dim]")

    for miss in result.unresolved:
        console.print(
            f"[yellow]Skipped {miss.declaration.label} "
            f"({miss.directory}): {_REASON_TEXT.get(miss.reason, miss.reason)}[/yellow]"
        )

    if result.unmatched_filters:
        console.print(
            "Following packages were used in the --packages flag but were "
            "not found in the packageDirectories:"
        )
        for name in sorted(result.unmatched_filters):
            console.print(f"    [yellow]{name}[/yellow]")


def print_reconciliation(reconciled: list[ReconciledDependency]) -> None:
    """Print the installation status of each resolved dependency."""
    table = Table(title="Installation Status", show_header=True, header_style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Package Version Id", no_wrap=True)
    table.add_column("Package")

    for item in reconciled:
        dep = item.dependency
        if item.is_installed:
            status = Text("INSTALLED", style="bold green")
        else:
            status = Text("PENDING", style="bold red")
        table.add_row(status, dep.artifact_id or "-", dep.label)
    console.print(table)

    missing = sum(1 for r in reconciled if not r.is_installed)
    if missing:
        console.print(
            Panel(
                f"[bold red]{missing} package(s) not installed[/bold red]. "
                "Install them before deploying this project.",
                title="Dependency Check",
            )
        )
    else:
        console.print(
            Panel("[bold green]All dependencies installed[/bold green]",
                  title="Dependency Check")
        )


def _resolved_to_json(dep: ResolvedDependency) -> dict[str, Any]:
    return {
        "dependentPackage": dep.dependent_package,
        "versionNumber": dep.version_number,
        "packageVersionId": dep.artifact_id,
    }


def _unresolved_to_json(miss: UnresolvedDependency) -> dict[str, Any]:
    return {
        "directory": miss.directory,
        "dependentPackage": miss.declaration.dependent_package,
        "versionNumber": miss.declaration.version_number,
        "reason": miss.reason,
    }


def build_json_report(
    result: WalkResult,
    reconciled: list[ReconciledDependency] | None,
    error: str | None = None,
) -> dict[str, Any]:
    """Build the JSON document for ``--format json``.

    Args:
        result: Outcome of the dependency walk.
        reconciled: Installation status, or None when not computed.
        error: Reconciliation error message, if reconciliation failed.

    Returns:
        A JSON-serializable dictionary.
    """
    report: dict[str, Any] = {
        "resolved": [_resolved_to_json(d) for d in result.resolved],
        "unresolved": [_unresolved_to_json(m) for m in result.unresolved],
        "unmatchedPackages": sorted(result.unmatched_filters),
        "reconciliation": None,
    }
    if reconciled is not None:
        report["reconciliation"] = [
            {**_resolved_to_json(r.dependency), "isInstalled": r.is_installed}
            for r in reconciled
        ]
    if error is not None:
        report["error"] = error
    return report
