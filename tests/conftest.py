"""Shared fixtures for pkgdeps tests."""

from __future__ import annotations

import json
import pathlib

import pytest

from pkgdeps.core import CatalogRecord, InMemoryCatalog

FAMILY_A = "0Ho000000000001"
FAMILY_B = "0Ho000000000002"


def make_record(
    artifact_id: str,
    build: int,
    *,
    family_id: str = FAMILY_A,
    version: tuple[int, int, int] = (1, 2, 3),
    namespace: str | None = None,
    branch: str | None = None,
) -> CatalogRecord:
    """Build a CatalogRecord for family *family_id* at *version*.*build*."""
    return CatalogRecord(
        artifact_id=artifact_id,
        major_version=version[0],
        minor_version=version[1],
        patch_version=version[2],
        build_number=build,
        namespace=namespace,
        branch=branch,
        family_id=family_id,
    )


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Catalog with two families, several builds, namespaces and branches."""
    return InMemoryCatalog([
        make_record("04t000000000005", 5),
        make_record("04t000000000009", 9),
        make_record("04t000000000007", 7, branch="DEV"),
        make_record("04t00000000000B", 2, family_id=FAMILY_B, version=(2, 0, 0),
                    namespace="acme"),
        make_record("04t00000000000C", 3, family_id=FAMILY_B, version=(2, 0, 0),
                    namespace="other"),
    ])


@pytest.fixture
def write_project(tmp_path: pathlib.Path):
    """Return a function that writes an sfdx-project.json into tmp_path."""

    def _write(data: dict, directory: pathlib.Path | None = None) -> pathlib.Path:
        root = directory or tmp_path
        root.mkdir(parents=True, exist_ok=True)
        (root / "sfdx-project.json").write_text(json.dumps(data), encoding="utf-8")
        return root

    return _write


@pytest.fixture
def record_factory():
    """Expose ``make_record`` to tests."""
    return make_record
