"""
API routes.

Endpoints:
- GET  `/api/health`: liveness probe.
- GET  `/api/distance`: distance between two addresses (never fails on lookup errors).
- GET  `/api/convert`: km <-> mi conversion.
- POST `/api/places/measure`: fill in a place's distance from the base location.
- GET  `/api/settings`: public settings (secrets redacted).
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, Query

from tripdistance.config.settings import get_settings, public_settings
from tripdistance.core.units import DistanceUnit, convert_distance
from tripdistance.distance.engine import DistanceEngine
from tripdistance.domain.models import (
    ConversionResponse,
    DistanceResponse,
    Place,
    PlaceMeasureRequest,
    Unresolved,
)
from tripdistance.places.distances import measure_place

router = APIRouter()


@lru_cache
def _engine() -> DistanceEngine:
    return DistanceEngine(get_settings())


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok"}


@router.get("/api/distance", response_model=DistanceResponse)
async def get_distance(
    origin: str = Query(..., min_length=1),
    destination: str = Query(..., min_length=1),
    unit: DistanceUnit | None = None,
) -> DistanceResponse:
    """Geocode both addresses and return their rounded great-circle distance."""
    engine = _engine()
    target = unit or engine.default_unit
    outcome = await engine.measure(origin, destination, target)
    if isinstance(outcome, Unresolved):
        return DistanceResponse(
            origin=origin,
            destination=destination,
            unit=target,
            distance=0.0,
            resolved=False,
            reason=outcome.reason,
        )
    return DistanceResponse(
        origin=origin,
        destination=destination,
        unit=outcome.unit,
        distance=outcome.value,
        resolved=True,
    )


@router.get("/api/convert", response_model=ConversionResponse)
def get_convert(value: float, from_unit: DistanceUnit, to_unit: DistanceUnit) -> ConversionResponse:
    return ConversionResponse(value=convert_distance(value, from_unit, to_unit), unit=to_unit)


@router.post("/api/places/measure", response_model=Place)
async def post_place_measure(request: PlaceMeasureRequest) -> Place:
    """Return the place with its tagged distance from the base location."""
    return await measure_place(_engine(), request.place, request.base_location, request.unit)


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return public settings for clients (credentials redacted)."""
    return public_settings(get_settings())
