"""DevHub Tooling API catalog of package versions.

Renders a ``CatalogFilter`` into a SOQL query against ``Package2Version``
and runs it through the Tooling API query endpoint of the DevHub org.

Usage::

    catalog = ToolingCatalog(session)
    records = await catalog.query(clause)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from pkgdeps.core.catalog import CatalogFilter, CatalogQuery, CatalogRecord
from pkgdeps.devhub.http_client import DEFAULT_TIMEOUT, fetch_json
from pkgdeps.exceptions import CatalogUnavailable

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_API_VERSION: str = "60.0"

QUERY_PATH: str = "/services/data/v{api_version}/tooling/query/"

_SELECT_FIELDS: tuple[str, ...] = (
    "SubscriberPackageVersionId",
    "Package2Id",
    "MajorVersion",
    "MinorVersion",
    "PatchVersion",
    "BuildNumber",
    "Branch",
    "IsReleased",
    "IsPasswordProtected",
    "Package2.NamespacePrefix",
)


@dataclass(frozen=True)
class OrgSession:
    """Authenticated session of an org, as reported by the Salesforce CLI.

    Attributes:
        username: Username of the org.
        access_token: OAuth access token.
        instance_url: Instance URL (e.g. "https://acme.my.salesforce.com").
        api_version: API version to call (e.g. "60.0").
    """

    username: str
    access_token: str
    instance_url: str
    api_version: str = DEFAULT_API_VERSION

    def __repr__(self) -> str:
        return (
            f"OrgSession(username={self.username!r}, "
            f"instance_url={self.instance_url!r}, api_version={self.api_version!r})"
        )


# ---------------------------------------------------------------------------
# SOQL rendering
# ---------------------------------------------------------------------------


def soql_quote(value: str) -> str:
    """Render *value* as a single-quoted SOQL string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def render_query(clause: CatalogFilter) -> str:
    """Render the SOQL selecting the best package version for *clause*.

    Results are ordered by build number, highest first, and limited to one
    row.
    """
    conditions = [
        f"Package2Id = {soql_quote(clause.family_id)}",
        f"MajorVersion = {clause.major}",
        f"MinorVersion = {clause.minor}",
        f"PatchVersion = {clause.patch}",
    ]
    if clause.namespaces is not None:
        values = ", ".join(soql_quote(ns) for ns in clause.namespaces)
        conditions.append(f"Package2.NamespacePrefix IN ({values})")
    if clause.build is not None:
        conditions.append(f"BuildNumber = {clause.build}")
    if clause.branch is not None:
        conditions.append(f"Branch = {soql_quote(clause.branch)}")

    return (
        f"SELECT {', '.join(_SELECT_FIELDS)} "
        "FROM Package2Version "
        f"WHERE {' AND '.join(conditions)} "
        "ORDER BY BuildNumber DESC LIMIT 1"
    )


def _record_from_row(row: dict[str, Any]) -> CatalogRecord:
    package2 = row.get("Package2") or {}
    try:
        return CatalogRecord(
            artifact_id=str(row["SubscriberPackageVersionId"]),
            major_version=int(row["MajorVersion"]),
            minor_version=int(row["MinorVersion"]),
            patch_version=int(row["PatchVersion"]),
            build_number=int(row["BuildNumber"]),
            namespace=package2.get("NamespacePrefix"),
            branch=row.get("Branch"),
            family_id=row.get("Package2Id"),
            is_released=bool(row.get("IsReleased", False)),
            is_password_protected=bool(row.get("IsPasswordProtected", False)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogUnavailable(f"Unexpected Package2Version record: {row!r}") from exc


# ---------------------------------------------------------------------------
# ToolingCatalog
# ---------------------------------------------------------------------------


class ToolingCatalog(CatalogQuery):
    """Package version catalog served by a DevHub's Tooling API.

    Args:
        session: Authenticated DevHub session.
        timeout: Request timeout in seconds.
        transport: Optional ``httpx`` transport override, used by tests.
    """

    def __init__(
        self,
        session: OrgSession,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._session = session
        self._timeout = timeout
        self._transport = transport

    @property
    def query_url(self) -> str:
        base = self._session.instance_url.rstrip("/")
        return base + QUERY_PATH.format(api_version=self._session.api_version)

    async def query(self, clause: CatalogFilter) -> list[CatalogRecord]:
        """Run the SOQL for *clause* against the DevHub.

        Raises:
            CatalogUnavailable: On HTTP failures or unexpected responses.
        """
        soql = render_query(clause)
        logger.debug("Tooling query: %s", soql)
        data = await fetch_json(
            self.query_url,
            params={"q": soql},
            headers={"Authorization": f"Bearer {self._session.access_token}"},
            timeout=self._timeout,
            transport=self._transport,
        )
        if not isinstance(data, dict) or not isinstance(data.get("records"), list):
            raise CatalogUnavailable("Tooling API returned no records array")
        return [_record_from_row(row) for row in data["records"]]
