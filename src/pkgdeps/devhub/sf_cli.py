"""Salesforce CLI adapter.

Runs ``sf`` commands with ``--json`` and extracts what pkgdeps needs from
their output: the session of the DevHub org and the subscriber package
versions installed in the target org.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any

from pkgdeps.devhub.tooling import DEFAULT_API_VERSION, OrgSession
from pkgdeps.exceptions import InstalledListUnavailable, OrgSessionUnavailable, PkgDepsError

logger = logging.getLogger(__name__)

DEFAULT_SF_BIN: str = "sf"

# Timeout for a single CLI invocation (seconds).
DEFAULT_CLI_TIMEOUT: float = 120.0


class SalesforceCli:
    """Runs Salesforce CLI commands and parses their JSON output.

    Args:
        executable: Name or path of the ``sf`` binary.
        timeout: Timeout of each invocation in seconds.
    """

    def __init__(
        self,
        executable: str = DEFAULT_SF_BIN,
        *,
        timeout: float = DEFAULT_CLI_TIMEOUT,
    ) -> None:
        self._executable = executable
        self._timeout = timeout

    def _run_json(
        self, args: list[str], error_cls: type[PkgDepsError]
    ) -> Any:
        """Run ``sf <args> --json`` and return the ``result`` member.

        Raises:
            error_cls: If the command cannot run, fails, or prints
                unparsable output.
        """
        cmd = [self._executable, *args, "--json"]
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise error_cls(f"Salesforce CLI not found: {self._executable}") from exc
        except subprocess.TimeoutExpired as exc:
            raise error_cls(
                f"{' '.join(cmd)} timed out after {self._timeout}s"
            ) from exc

        try:
            payload = json.loads(proc.stdout)
        except json.JSONDecodeError as exc:
            detail = (proc.stderr or proc.stdout).strip()[:200]
            raise error_cls(
                f"{' '.join(cmd)} exited with code {proc.returncode}: {detail}"
            ) from exc

        if not isinstance(payload, dict):
            raise error_cls(f"{' '.join(cmd)} printed unexpected output")
        if proc.returncode != 0 or payload.get("status", 0) != 0:
            reason = payload.get("message") or f"exit code {proc.returncode}"
            raise error_cls(f"{' '.join(cmd)} failed: {reason}")
        return payload.get("result")

    def org_session(self, target_org: str) -> OrgSession:
        """Return the session of *target_org* via ``sf org display``.

        Raises:
            OrgSessionUnavailable: If the org is unknown or not authenticated.
        """
        result = self._run_json(
            ["org", "display", "--target-org", target_org], OrgSessionUnavailable,
        )
        if not isinstance(result, dict):
            raise OrgSessionUnavailable(f"No org information returned for {target_org}")
        token = result.get("accessToken")
        instance_url = result.get("instanceUrl")
        if not token or not instance_url:
            raise OrgSessionUnavailable(
                f"Org {target_org} has no access token or instance URL; "
                "re-authenticate it with the Salesforce CLI"
            )
        return OrgSession(
            username=str(result.get("username") or target_org),
            access_token=str(token),
            instance_url=str(instance_url),
            api_version=str(result.get("apiVersion") or DEFAULT_API_VERSION),
        )

    def installed_packages(self, target_org: str) -> frozenset[str]:
        """Return the subscriber package version ids installed in *target_org*.

        Raises:
            InstalledListUnavailable: If the installed list cannot be fetched.
        """
        result = self._run_json(
            ["package", "installed", "list", "--target-org", target_org],
            InstalledListUnavailable,
        )
        if not isinstance(result, list):
            raise InstalledListUnavailable(
                f"Unexpected installed package list for {target_org}"
            )
        installed = frozenset(
            str(row["SubscriberPackageVersionId"])
            for row in result
            if isinstance(row, dict) and row.get("SubscriberPackageVersionId")
        )
        logger.debug("%d packages installed in %s", len(installed), target_org)
        return installed
