"""
Place distance helpers.

Places are measured from the trip's base location (hotel, rental). The stored
distance keeps the unit it was computed in; display converts it to whatever
unit the user prefers now.
"""

from __future__ import annotations

import logging

from tripdistance.core.units import DistanceUnit, round_distance
from tripdistance.distance.engine import DistanceEngine
from tripdistance.domain.models import Distance, Place, Unresolved

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "unknown"


async def measure_place(
    engine: DistanceEngine,
    place: Place,
    base_location: str,
    unit: DistanceUnit | None = None,
) -> Place:
    """Return a copy of `place` with its distance from `base_location` filled in.

    A failed lookup or a cleared address drops the distance (unknown) instead of
    recording 0. Without a base location the place is returned unchanged.
    """
    if not base_location.strip():
        return place
    if not place.address:
        return place if place.distance is None else place.model_copy(update={"distance": None})

    outcome = await engine.measure(base_location, place.address, unit)
    if isinstance(outcome, Unresolved):
        logger.info("Stored no distance for place %r", place.name)
        return place.model_copy(update={"distance": None})
    return place.model_copy(update={"distance": outcome})


def display_distance(distance: Distance | None, unit: DistanceUnit, decimals: int = 1) -> float | None:
    """Convert a stored distance to the current display unit."""
    if distance is None:
        return None
    return round_distance(distance.to(unit).value, decimals)


def format_distance(distance: Distance | None, unit: DistanceUnit, decimals: int = 1) -> str:
    value = display_distance(distance, unit, decimals)
    if value is None:
        return UNKNOWN_LABEL
    return f"{value:.{decimals}f} {unit}"
