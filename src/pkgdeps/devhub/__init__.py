"""DevHub access: Tooling API package version catalog and Salesforce CLI.

Public API::

    from pkgdeps.devhub import OrgSession, SalesforceCli, ToolingCatalog
"""

from __future__ import annotations

from pkgdeps.devhub.sf_cli import SalesforceCli
from pkgdeps.devhub.tooling import OrgSession, ToolingCatalog, render_query

__all__ = [
    "OrgSession",
    "SalesforceCli",
    "ToolingCatalog",
    "render_query",
]
