"""
Distance engine.

Pipeline for one request:
1) geocode origin and destination concurrently
2) haversine distance in kilometers
3) convert to the requested unit
4) round for display

`DistanceEngine.measure` keeps "could not resolve" explicit (`Unresolved`);
`DistanceEngine.compute_distance` is the fail-open form used by save flows,
returning 0.0 so a failed lookup never blocks storing a place.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from tripdistance.config.settings import Settings, get_settings
from tripdistance.core.geo import GeoPoint, haversine_km
from tripdistance.core.units import DistanceUnit, convert_distance, parse_unit, round_distance
from tripdistance.domain.models import Distance, DistanceOutcome, Unresolved
from tripdistance.ingestion.geocoding_client import GeocodingClient

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    async def lookup(self, address: str) -> GeoPoint | Unresolved: ...


class DistanceEngine:
    """Computes rounded great-circle distances between two free-text addresses."""

    def __init__(self, settings: Settings, geocoder: Geocoder | None = None):
        self._settings = settings
        self._geocoder = geocoder or GeocodingClient(settings)

    @property
    def default_unit(self) -> DistanceUnit:
        return self._settings.distance.default_unit

    async def measure(self, origin: str, destination: str, unit: str | None = None) -> DistanceOutcome:
        """Return the distance between two addresses, or `Unresolved` for the first failed lookup.

        Raises:
            ValueError: If `unit` is not `km` / `mi` (checked before any network call).
        """
        target = parse_unit(unit) if unit is not None else self.default_unit

        origin_point, destination_point = await asyncio.gather(
            self._geocoder.lookup(origin),
            self._geocoder.lookup(destination),
        )
        for outcome in (origin_point, destination_point):
            if isinstance(outcome, Unresolved):
                logger.warning("Distance unknown: could not geocode %r (%s)", outcome.address, outcome.reason)
                return outcome

        km = haversine_km(origin_point, destination_point)
        value = round_distance(convert_distance(km, "km", target), self._settings.distance.decimals)
        logger.debug("Distance %r -> %r: %.3f km (%s %s)", origin, destination, km, value, target)
        return Distance(value=value, unit=target)

    async def compute_distance(self, origin: str, destination: str, unit: str | None = None) -> float:
        """Return the rounded distance, or 0.0 when either address cannot be resolved."""
        outcome = await self.measure(origin, destination, unit)
        if isinstance(outcome, Unresolved):
            return 0.0
        return outcome.value


async def compute_distance(origin: str, destination: str, unit: str | None = None) -> float:
    """Convenience wrapper using process-wide settings."""
    return await DistanceEngine(get_settings()).compute_distance(origin, destination, unit)
