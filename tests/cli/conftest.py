"""Shared fixtures for CLI tests.

Provides a sample project directory, a Salesforce CLI double and a
catalog double so ``pkgdeps check`` runs without an org or network.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner
from rich.console import Console

from pkgdeps.core import InMemoryCatalog
from pkgdeps.devhub import OrgSession

FAMILY_CORE = "0Ho000000000001"
FAMILY_UTILS = "0Ho000000000002"

SAMPLE_PROJECT = {
    "packageDirectories": [
        {
            "path": "core-app",
            "package": "core",
            "versionNumber": "2.0.0.NEXT",
            "dependencies": [
                {"package": "utils", "versionNumber": "1.2.3.LATEST"},
                {"package": "base@1.0.0-1"},
            ],
        },
        {
            "path": "sales-app",
            "package": "sales",
            "dependencies": [
                {"package": "core-lib", "versionNumber": "2.0.0.2"},
            ],
        },
    ],
    "packageAliases": {
        "utils": FAMILY_UTILS,
        "core-lib": FAMILY_CORE,
        "base@1.0.0-1": "04t0000000000BA",
    },
}

SESSION = OrgSession(
    username="admin@acme.devhub",
    access_token="00D!token",
    instance_url="https://acme.my.salesforce.com",
    api_version="60.0",
)


@pytest.fixture
def runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_dir(write_project) -> Path:
    """A project with two package directories and three dependencies."""
    return write_project(SAMPLE_PROJECT)


@pytest.fixture
def devhub_catalog(record_factory) -> InMemoryCatalog:
    """Package versions of the utils and core-lib families."""
    return InMemoryCatalog([
        record_factory("04t0000000000U5", 5, family_id=FAMILY_UTILS),
        record_factory("04t0000000000U8", 8, family_id=FAMILY_UTILS),
        record_factory("04t0000000000C2", 2, family_id=FAMILY_CORE, version=(2, 0, 0)),
    ])


@pytest.fixture
def sf_cli():
    """Patch the Salesforce CLI adapter used by ``pkgdeps check``.

    Yields the mock instance; tests set ``installed_packages`` as needed.
    """
    instance = MagicMock()
    instance.org_session.return_value = SESSION
    instance.installed_packages.return_value = frozenset()
    with patch("pkgdeps.cli.check.SalesforceCli", return_value=instance):
        yield instance


@pytest.fixture
def tooling(devhub_catalog: InMemoryCatalog):
    """Patch the Tooling API catalog with ``devhub_catalog``.

    Yields the class mock so tests can inspect how it was constructed.
    """
    with patch("pkgdeps.cli.check.ToolingCatalog", return_value=devhub_catalog) as cls:
        yield cls


@pytest.fixture(autouse=True)
def plain_console(monkeypatch) -> None:
    """Render rich output without colour and at a fixed width."""
    monkeypatch.setattr(
        "pkgdeps.cli.output.console",
        Console(color_system=None, force_terminal=False, width=120),
    )
