"""``pkgdeps check``: Resolve package dependencies and check installation.

Loads the project's package directories, resolves every declared
dependency to a subscriber package version through the DevHub, then lists
the packages installed in the target org and reports which resolved
dependencies are already installed.

Exit Codes:
    0: Every resolved dependency is installed (or none resolved).
    1: One or more resolved dependencies are not installed.
    2: Project or declaration error (no project file, malformed entry).
    3: DevHub session or package version catalog unavailable.
    4: Installed package list unavailable (resolution still reported).
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import NoReturn

import click

from pkgdeps.cli import output
from pkgdeps.config import (
    ENV_API_VERSION,
    ENV_DEVHUB,
    ENV_SF_BIN,
    ENV_TARGET_ORG,
    ENV_TIMEOUT,
    CheckSettings,
)
from pkgdeps.core import CatalogResolver, DependencyWalker, WalkResult, pending, reconcile
from pkgdeps.devhub import SalesforceCli, ToolingCatalog
from pkgdeps.devhub.http_client import DEFAULT_TIMEOUT
from pkgdeps.devhub.sf_cli import DEFAULT_SF_BIN
from pkgdeps.exceptions import (
    CatalogUnavailable,
    DependencyDeclarationError,
    InstalledListUnavailable,
    OrgSessionUnavailable,
    ProjectConfigError,
)
from pkgdeps.project import load_project

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PENDING = 1
EXIT_PROJECT_ERROR = 2
EXIT_CATALOG_ERROR = 3
EXIT_INSTALLED_ERROR = 4


def _fail(message: str, code: int) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def _resolve(settings: CheckSettings, sf: SalesforceCli) -> WalkResult:
    """Load the project and walk its package directories.

    Raises:
        ProjectConfigError: The project file is missing or malformed.
        DependencyDeclarationError: A declaration is malformed.
        OrgSessionUnavailable: The DevHub session cannot be obtained.
        CatalogUnavailable: A catalog query failed.
    """
    project = load_project(settings.project_dir)
    session = sf.org_session(settings.devhub)
    if settings.api_version:
        session = replace(session, api_version=settings.api_version)
    catalog = ToolingCatalog(session, timeout=settings.timeout)
    walker = DependencyWalker(
        project.alias_resolver(),
        CatalogResolver(catalog),
        max_concurrency=settings.concurrency,
    )
    return asyncio.run(
        walker.walk(
            project.directories,
            package_filter=settings.packages,
            namespace_filter=settings.namespaces,
            branch=settings.branch,
        )
    )


@click.command("check")
@click.option("--target-org", "-u", required=True, envvar=ENV_TARGET_ORG,
              help="Org whose installed packages are checked.")
@click.option("--target-dev-hub", "-v", "devhub", required=True, envvar=ENV_DEVHUB,
              help="DevHub org that owns the package versions.")
@click.option("--branch", "-b", default=None,
              help="Only consider package versions built from this branch.")
@click.option("--packages", "-p", default=None,
              help="Comma-separated package names whose dependencies are checked.")
@click.option("--namespaces", "-n", default=None,
              help="Comma-separated namespace prefixes to filter package versions.")
@click.option("--project-dir", type=click.Path(exists=True, file_okay=False),
              default=None, help="Directory inside the project (default: cwd).")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option("--concurrency", type=click.IntRange(min=1), default=1, show_default=True,
              help="Maximum simultaneous DevHub queries per package directory.")
@click.option("--sf-bin", default=DEFAULT_SF_BIN, envvar=ENV_SF_BIN, show_default=True,
              help="Salesforce CLI executable.")
@click.option("--api-version", default=None, envvar=ENV_API_VERSION,
              help="API version for DevHub queries (default: the org's).")
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, envvar=ENV_TIMEOUT,
              show_default=True, help="HTTP timeout in seconds.")
def check_command(
    target_org: str,
    devhub: str,
    branch: str | None,
    packages: str | None,
    namespaces: str | None,
    project_dir: str | None,
    output_format: str,
    concurrency: int,
    sf_bin: str,
    api_version: str | None,
    timeout: float,
) -> None:
    """Check which package dependencies are installed in the target org.

    Each dependency declared in sfdx-project.json is resolved to a package
    version id: aliases are looked up in packageAliases, and package ids
    with a version number such as 1.2.3.LATEST are resolved to the highest
    matching build in the DevHub.

    Examples:

        pkgdeps check -u MyScratchOrg -v MyDevHub -b "DEV"

        pkgdeps check -u MyScratchOrg -v MyDevHub -p core,sales --format json
    """
    settings = CheckSettings.from_options(
        target_org=target_org,
        devhub=devhub,
        packages=packages,
        namespaces=namespaces,
        branch=branch,
        project_dir=project_dir,
        sf_bin=sf_bin,
        api_version=api_version,
        timeout=timeout,
        concurrency=concurrency,
    )
    logger.debug("Check settings: %s", settings)
    as_json = output_format == "json"
    sf = SalesforceCli(settings.sf_bin)

    if not as_json:
        output.print_filters(settings)

    try:
        result = _resolve(settings, sf)
    except (ProjectConfigError, DependencyDeclarationError) as exc:
        _fail(str(exc), EXIT_PROJECT_ERROR)
    except (OrgSessionUnavailable, CatalogUnavailable) as exc:
        _fail(str(exc), EXIT_CATALOG_ERROR)

    if not as_json:
        output.print_walk_result(result)

    reconciled = None
    if result.resolved:
        try:
            installed = sf.installed_packages(settings.target_org)
        except InstalledListUnavailable as exc:
            if as_json:
                report = output.build_json_report(result, None, error=str(exc))
                click.echo(json.dumps(report, indent=2))
                sys.exit(EXIT_INSTALLED_ERROR)
            _fail(str(exc), EXIT_INSTALLED_ERROR)
        reconciled = reconcile(result.resolved, installed)

    if as_json:
        click.echo(json.dumps(output.build_json_report(result, reconciled), indent=2))
    elif reconciled is not None:
        output.print_reconciliation(reconciled)

    if reconciled is not None and pending(reconciled):
        sys.exit(EXIT_PENDING)
    sys.exit(EXIT_OK)
