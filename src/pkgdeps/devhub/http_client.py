"""Shared async HTTP client utilities for DevHub API calls.

Provides a thin wrapper around ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, and error handling, so that HTTP behaviour is
consistent and testable.

Raises ``CatalogUnavailable`` (a subclass of ``PkgDepsError``) on every HTTP
failure. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pkgdeps.exceptions import CatalogUnavailable

logger = logging.getLogger(__name__)

# Timeout for all DevHub HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = "pkgdeps/0.1"


def _error_message(resp: httpx.Response) -> str:
    """Extract the Salesforce error message from an error response body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, list) and body and isinstance(body[0], dict):
        code = body[0].get("errorCode", "")
        message = body[0].get("message", "")
        return f"{code}: {message}" if code else str(message)
    return resp.text[:200]


async def fetch_json(
    url: str,
    *,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any] | list[Any]:
    """Fetch a URL and parse the response as JSON.

    Args:
        url: The URL to fetch.
        params: Optional query parameters.
        headers: Extra request headers (e.g. ``Authorization``).
        timeout: Request timeout in seconds.
        transport: Optional transport override, used by tests.

    Returns:
        Parsed JSON response (dict or list).

    Raises:
        CatalogUnavailable: On HTTP errors, timeouts, or invalid JSON.
    """
    request_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    request_headers.update(headers or {})
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers=request_headers,
            follow_redirects=True,
            transport=transport,
        ) as client:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s", url)
        raise CatalogUnavailable(f"Request to {url} timed out after {timeout}s") from exc
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.warning("HTTP %d from %s", status, url)
        raise CatalogUnavailable(
            f"HTTP {status} from {url}: {_error_message(exc.response)}"
        ) from exc
    except httpx.RequestError as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise CatalogUnavailable(f"Request to {url} failed: {exc}") from exc
    except ValueError as exc:
        logger.warning("Invalid JSON from %s", url)
        raise CatalogUnavailable(f"Invalid JSON response from {url}") from exc
