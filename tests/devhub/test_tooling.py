"""Tests for the Tooling API catalog: HTTP served by a mock transport."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from pkgdeps.core import CatalogFilter, CatalogRecord
from pkgdeps.devhub.tooling import OrgSession, ToolingCatalog, render_query, soql_quote
from pkgdeps.exceptions import CatalogUnavailable

FAMILY = "0Ho000000000001"

SESSION = OrgSession(
    username="admin@acme.devhub",
    access_token="00Dxx!secret",
    instance_url="https://acme.my.salesforce.com/",
    api_version="59.0",
)


def _row(artifact_id: str, build: int, **extra: Any) -> dict[str, Any]:
    row = {
        "attributes": {"type": "Package2Version"},
        "SubscriberPackageVersionId": artifact_id,
        "Package2Id": FAMILY,
        "MajorVersion": 1,
        "MinorVersion": 2,
        "PatchVersion": 3,
        "BuildNumber": build,
        "Branch": None,
        "IsReleased": True,
        "IsPasswordProtected": False,
        "Package2": {"NamespacePrefix": "acme"},
    }
    row.update(extra)
    return row


def _catalog(handler) -> ToolingCatalog:
    return ToolingCatalog(SESSION, transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# SOQL rendering
# ---------------------------------------------------------------------------


class TestRenderQuery:
    """Tests for render_query."""

    def test_wildcard_build(self) -> None:
        soql = render_query(CatalogFilter(FAMILY, 1, 2, 3))
        assert "FROM Package2Version" in soql
        assert (
            f"WHERE Package2Id = '{FAMILY}' AND MajorVersion = 1 "
            "AND MinorVersion = 2 AND PatchVersion = 3 "
        ) in soql
        assert "BuildNumber =" not in soql
        assert soql.endswith("ORDER BY BuildNumber DESC LIMIT 1")

    def test_exact_build(self) -> None:
        soql = render_query(CatalogFilter(FAMILY, 1, 2, 3, build=5))
        assert "AND BuildNumber = 5 " in soql

    def test_namespaces(self) -> None:
        soql = render_query(CatalogFilter(FAMILY, 1, 2, 3, namespaces=("acme", "other")))
        assert "Package2.NamespacePrefix IN ('acme', 'other')" in soql

    def test_branch(self) -> None:
        soql = render_query(CatalogFilter(FAMILY, 1, 2, 3, branch="DEV"))
        assert "AND Branch = 'DEV' " in soql

    def test_no_namespace_or_branch_clause_by_default(self) -> None:
        soql = render_query(CatalogFilter(FAMILY, 1, 2, 3))
        assert "NamespacePrefix IN" not in soql
        assert "Branch =" not in soql

    def test_quotes_escaped(self) -> None:
        soql = render_query(CatalogFilter(FAMILY, 1, 2, 3, branch="it's"))
        assert "Branch = 'it\\'s'" in soql

    @pytest.mark.parametrize(
        ("raw", "quoted"),
        [("abc", "'abc'"), ("a'b", "'a\\'b'"), ("a\\b", "'a\\\\b'")],
    )
    def test_soql_quote(self, raw: str, quoted: str) -> None:
        assert soql_quote(raw) == quoted


# ---------------------------------------------------------------------------
# ToolingCatalog
# ---------------------------------------------------------------------------


class TestToolingCatalog:
    """Tests for ToolingCatalog.query."""

    def test_query_url(self) -> None:
        catalog = ToolingCatalog(SESSION)
        assert catalog.query_url == (
            "https://acme.my.salesforce.com/services/data/v59.0/tooling/query/"
        )

    def test_request_carries_token_and_soql(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"totalSize": 0, "records": []})

        clause = CatalogFilter(FAMILY, 1, 2, 3, build=5)
        asyncio.run(_catalog(handler).query(clause))
        request = seen[0]
        assert request.headers["Authorization"] == "Bearer 00Dxx!secret"
        assert request.url.params["q"] == render_query(clause)

    def test_records_parsed(self) -> None:
        body = {"totalSize": 1, "done": True, "records": [_row("04t000000000009", 9)]}
        records = asyncio.run(
            _catalog(lambda r: httpx.Response(200, json=body)).query(CatalogFilter(FAMILY, 1, 2, 3))
        )
        assert records == [
            CatalogRecord(
                artifact_id="04t000000000009",
                major_version=1,
                minor_version=2,
                patch_version=3,
                build_number=9,
                namespace="acme",
                branch=None,
                family_id=FAMILY,
                is_released=True,
                is_password_protected=False,
            )
        ]

    def test_missing_package2_relation(self) -> None:
        body = {"records": [_row("04t000000000009", 9, Package2=None)]}
        records = asyncio.run(
            _catalog(lambda r: httpx.Response(200, json=body)).query(CatalogFilter(FAMILY, 1, 2, 3))
        )
        assert records[0].namespace is None

    def test_no_records(self) -> None:
        body = {"totalSize": 0, "records": []}
        records = asyncio.run(
            _catalog(lambda r: httpx.Response(200, json=body)).query(CatalogFilter(FAMILY, 1, 2, 3))
        )
        assert records == []

    @pytest.mark.parametrize("body", [{"totalSize": 0}, [], {"records": "none"}])
    def test_unexpected_body(self, body: Any) -> None:
        with pytest.raises(CatalogUnavailable):
            asyncio.run(
                _catalog(lambda r: httpx.Response(200, json=body)).query(
                    CatalogFilter(FAMILY, 1, 2, 3)
                )
            )

    def test_malformed_row(self) -> None:
        body = {"records": [{"SubscriberPackageVersionId": "04t000000000009"}]}
        with pytest.raises(CatalogUnavailable, match="Unexpected Package2Version record"):
            asyncio.run(
                _catalog(lambda r: httpx.Response(200, json=body)).query(
                    CatalogFilter(FAMILY, 1, 2, 3)
                )
            )

    def test_http_failure(self) -> None:
        with pytest.raises(CatalogUnavailable):
            asyncio.run(
                _catalog(lambda r: httpx.Response(500, text="boom")).query(
                    CatalogFilter(FAMILY, 1, 2, 3)
                )
            )


class TestOrgSession:
    """Tests for OrgSession."""

    def test_repr_hides_token(self) -> None:
        assert "secret" not in repr(SESSION)
        assert "admin@acme.devhub" in repr(SESSION)
