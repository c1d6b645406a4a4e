"""
HTTP helpers.

This module centralizes the minimal HTTP client logic used by the geocoding client.

Design goals:
- Small surface area (async GET JSON).
- Deterministic defaults (timeout + User-Agent).
- Raise on non-2xx so callers can decide how to fail (the distance engine "fails open").
"""

from __future__ import annotations

import re
from typing import Any

import httpx


DEFAULT_USER_AGENT = "tripdistance/0.1.0 (+https://local)"

_SECRET_PARAM_RE = re.compile(r"(?<=[?&])(key|api_key|email)=[^&'\s]+")


def redact_url(url: str | httpx.URL) -> str:
    """Remove credentials from a URL's query string for safe logging."""
    return _SECRET_PARAM_RE.sub(r"\1=REDACTED", str(url))


async def aget_json(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout_seconds: float = 10,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """GET `url` and return the decoded JSON response.

    A fresh client is opened per call so concurrent callers never share connection state.

    Raises:
        httpx.HTTPError: On transport errors, timeouts or non-2xx status codes.
        ValueError: If the response body is not valid JSON.
    """
    request_headers = {"User-Agent": DEFAULT_USER_AGENT}
    if headers:
        request_headers.update(headers)

    async with httpx.AsyncClient(timeout=timeout_seconds, transport=transport) as client:
        resp = await client.get(url, params=params, headers=request_headers)
        resp.raise_for_status()
        return resp.json()
