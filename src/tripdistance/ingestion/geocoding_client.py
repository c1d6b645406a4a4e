"""
Geocoding client (Nominatim-compatible address search).

This module maps a free-text address to a `GeoPoint`:
- one GET per lookup with `q=<address>&format=json&limit=1`
- the first candidate's string-encoded `lat` / `lon` are parsed as floats

Failures never propagate: no candidates, transport errors, bad payloads and
non-finite coordinates all come back as an `Unresolved` outcome (or `None` from
`resolve`). There is no retry, caching or rate limiting at this layer.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from tripdistance.config.settings import Settings
from tripdistance.core.geo import GeoPoint
from tripdistance.core.http import aget_json, redact_url
from tripdistance.domain.models import Unresolved

logger = logging.getLogger(__name__)


def _parse_first_candidate(address: str, payload: Any) -> GeoPoint | Unresolved:
    if not isinstance(payload, list):
        logger.warning("Geocoder returned non-list payload for %r", address)
        return Unresolved(address=address, reason="malformed_response")
    if not payload:
        logger.info("Geocoder found no match for %r", address)
        return Unresolved(address=address, reason="not_found")

    top = payload[0]
    if not isinstance(top, dict):
        return Unresolved(address=address, reason="malformed_response")
    try:
        point = GeoPoint(lat=float(top["lat"]), lon=float(top["lon"]))
    except (KeyError, TypeError, ValueError):
        logger.warning("Geocoder candidate for %r lacks numeric lat/lon: %r", address, top)
        return Unresolved(address=address, reason="malformed_response")

    if not point.is_valid():
        logger.warning("Geocoder returned out-of-range coordinates for %r: %s", address, point)
        return Unresolved(address=address, reason="invalid_coordinates")
    return point


class GeocodingClient:
    """Resolves addresses through a Nominatim-style `/search` endpoint."""

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings
        self._transport = transport

    def _params(self, address: str) -> dict[str, Any]:
        geocoding = self._settings.geocoding
        params: dict[str, Any] = {"q": address, "format": "json", "limit": 1}
        if geocoding.api_key:
            params["key"] = geocoding.api_key
        if geocoding.email:
            params["email"] = geocoding.email
        if geocoding.accept_language:
            params["accept-language"] = geocoding.accept_language
        return params

    async def lookup(self, address: str) -> GeoPoint | Unresolved:
        """Resolve `address`, returning the best match or an `Unresolved` outcome."""
        query = (address or "").strip()
        if not query:
            return Unresolved(address=address or "", reason="not_found")

        url = self._settings.geocoding.base_url
        params = self._params(query)
        try:
            logger.debug("Geocoding %s", redact_url(httpx.URL(url, params=params)))
            payload = await aget_json(
                url,
                params=params,
                headers={"User-Agent": self._settings.app.user_agent, "Accept": "application/json"},
                timeout_seconds=self._settings.app.http_timeout_seconds,
                transport=self._transport,
            )
        except (httpx.InvalidURL, UnicodeError):
            # Over-long queries and lone surrogates cannot be encoded into a request URL.
            logger.warning("Geocoding skipped for an address that cannot be sent (%d chars)", len(query))
            printable = query.encode("utf-8", "backslashreplace").decode("utf-8")
            return Unresolved(address=printable, reason="invalid_address")
        except httpx.HTTPError as exc:
            logger.warning("Geocoding request failed for %r: %s", query, redact_url(str(exc)))
            return Unresolved(address=query, reason="http_error")
        except ValueError:
            logger.warning("Geocoder returned a non-JSON body for %r", query)
            return Unresolved(address=query, reason="malformed_response")

        return _parse_first_candidate(query, payload)

    async def resolve(self, address: str) -> GeoPoint | None:
        """Resolve `address` to coordinates, or None when it cannot be matched."""
        outcome = await self.lookup(address)
        return outcome if isinstance(outcome, GeoPoint) else None
