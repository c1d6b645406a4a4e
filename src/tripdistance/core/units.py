"""
Distance units and conversion.

Only kilometers and miles are supported. The conversion factor is the fixed
1 mi = 1.60934 km so stored values reproduce exactly across clients.
"""

from __future__ import annotations

from typing import Literal, get_args

DistanceUnit = Literal["km", "mi"]

SUPPORTED_UNITS: tuple[str, ...] = get_args(DistanceUnit)
KM_PER_MILE = 1.60934


def parse_unit(value: str) -> DistanceUnit:
    """Normalize a user-provided unit string.

    Raises:
        ValueError: If `value` is not one of `km` / `mi`.
    """
    unit = str(value or "").strip().lower()
    if unit not in SUPPORTED_UNITS:
        raise ValueError(f"Unsupported distance unit {value!r}; expected one of {', '.join(SUPPORTED_UNITS)}")
    return unit  # type: ignore[return-value]


def convert_distance(value: float, from_unit: str, to_unit: str) -> float:
    """Convert `value` between kilometers and miles (no rounding).

    Equal units return `value` unchanged.
    """
    src = parse_unit(from_unit)
    dst = parse_unit(to_unit)
    if src == dst:
        return value
    if src == "km":
        return value / KM_PER_MILE
    return value * KM_PER_MILE


def round_distance(value: float, decimals: int = 1) -> float:
    """Round a distance for display (one decimal by default)."""
    return round(value, decimals)
