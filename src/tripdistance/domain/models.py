"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- engine outcomes (`Distance`, `Unresolved`)
- planner records (`Place`)
- API inputs/outputs (`DistanceResponse`, `PlaceMeasureRequest`, ...)

A `Distance` always carries the unit it was computed in, so a stored value stays
meaningful after the user switches their preferred unit.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from tripdistance.core.units import DistanceUnit, convert_distance

UnresolvedReason = Literal["not_found", "invalid_address", "http_error", "malformed_response", "invalid_coordinates"]


class Distance(BaseModel):
    """A non-negative distance tagged with its unit."""

    model_config = {"frozen": True}

    value: float = Field(..., ge=0)
    unit: DistanceUnit

    def to(self, unit: DistanceUnit) -> "Distance":
        """Return this distance expressed in `unit` (unrounded)."""
        return Distance(value=convert_distance(self.value, self.unit, unit), unit=unit)


class Unresolved(BaseModel):
    """Outcome of a distance lookup where an address could not be geocoded."""

    model_config = {"frozen": True}

    address: str
    reason: UnresolvedReason = "not_found"


DistanceOutcome = Distance | Unresolved


class Place(BaseModel):
    """A candidate restaurant or activity recorded for a trip."""

    name: str = Field(..., min_length=1)
    address: str = ""
    kind: Literal["restaurant", "activity"] = "restaurant"
    notes: str = ""
    rating: int = Field(5, ge=1, le=5)
    visited: bool = False
    distance: Distance | None = None

    @field_validator("name", "address")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class DistanceResponse(BaseModel):
    """Public result of a distance lookup (always well-formed, even on failure)."""

    origin: str
    destination: str
    unit: DistanceUnit
    distance: float
    resolved: bool
    reason: UnresolvedReason | None = None


class ConversionResponse(BaseModel):
    value: float
    unit: DistanceUnit


class PlaceMeasureRequest(BaseModel):
    """Payload for measuring a place against the trip's base location."""

    place: Place
    base_location: str
    unit: DistanceUnit | None = None
