"""Runtime settings for a dependency check.

Settings come from command-line options, each with an environment variable
fallback (see ``pkgdeps check --help``). Free-text filters are normalised
here so the core only ever sees trimmed, non-empty values.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pkgdeps.devhub.http_client import DEFAULT_TIMEOUT
from pkgdeps.devhub.sf_cli import DEFAULT_SF_BIN

ENV_TARGET_ORG = "PKGDEPS_TARGET_ORG"
ENV_DEVHUB = "PKGDEPS_DEVHUB"
ENV_SF_BIN = "PKGDEPS_SF_BIN"
ENV_API_VERSION = "PKGDEPS_API_VERSION"
ENV_TIMEOUT = "PKGDEPS_TIMEOUT"
ENV_LOG_LEVEL = "PKGDEPS_LOG_LEVEL"


def split_csv(raw: str | None) -> list[str]:
    """Split a comma-separated option value into trimmed, non-empty items."""
    if raw is None:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class CheckSettings:
    """Settings of one ``pkgdeps check`` run.

    Attributes:
        target_org: Org whose installed packages are checked.
        devhub: DevHub org whose package versions are queried.
        packages: Package names to restrict the check to (empty: all).
        namespaces: Accepted namespace prefixes, or None for any.
        branch: Required package version branch, or None for any.
        project_dir: Directory inside the project, or None for the cwd.
        sf_bin: Salesforce CLI executable.
        api_version: API version override, or None for the org's default.
        timeout: HTTP request timeout in seconds.
        concurrency: Maximum simultaneous catalog queries per directory.
    """

    target_org: str
    devhub: str
    packages: frozenset[str] = frozenset()
    namespaces: tuple[str, ...] | None = None
    branch: str | None = None
    project_dir: Path | None = None
    sf_bin: str = DEFAULT_SF_BIN
    api_version: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    concurrency: int = 1

    @classmethod
    def from_options(
        cls,
        *,
        target_org: str,
        devhub: str,
        packages: str | None = None,
        namespaces: str | None = None,
        branch: str | None = None,
        project_dir: str | None = None,
        sf_bin: str = DEFAULT_SF_BIN,
        api_version: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        concurrency: int = 1,
    ) -> CheckSettings:
        """Build settings from raw option values."""
        ns = split_csv(namespaces)
        return cls(
            target_org=target_org,
            devhub=devhub,
            packages=frozenset(split_csv(packages)),
            namespaces=tuple(ns) if ns else None,
            branch=(branch or "").strip() or None,
            project_dir=Path(project_dir) if project_dir else None,
            sf_bin=sf_bin,
            api_version=api_version,
            timeout=timeout,
            concurrency=concurrency,
        )
