"""
tripdistance CLI entrypoint.

This CLI is intended for quick local checks without the planner UI.
It delegates all distance logic to `tripdistance.distance.engine.DistanceEngine`.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from tripdistance.config.settings import get_settings
from tripdistance.core.logging import configure_logging
from tripdistance.core.units import SUPPORTED_UNITS, convert_distance
from tripdistance.distance.engine import DistanceEngine
from tripdistance.domain.models import Unresolved


def _cmd_distance(args: argparse.Namespace) -> int:
    """Handle the `distance` subcommand."""
    engine = DistanceEngine(args.settings)
    unit = args.unit or engine.default_unit
    outcome = asyncio.run(engine.measure(args.origin, args.destination, unit))

    resolved = not isinstance(outcome, Unresolved)
    value = outcome.value if resolved else 0.0
    if args.json:
        payload = {
            "origin": args.origin,
            "destination": args.destination,
            "unit": unit,
            "distance": value,
            "resolved": resolved,
            "reason": None if resolved else outcome.reason,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    if not resolved:
        print(f"Could not geocode {outcome.address!r} ({outcome.reason}); distance: 0.0 {unit}")
        return 0
    print(f"{value} {unit}")
    return 0


def _cmd_convert(args: argparse.Namespace) -> int:
    print(convert_distance(float(args.value), args.from_unit, args.to_unit))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the tripdistance CLI."""
    parser = argparse.ArgumentParser(prog="tripdistance")
    sub = parser.add_subparsers(dest="command", required=True)

    dist = sub.add_parser("distance", help="Great-circle distance between two addresses.")
    dist.add_argument("origin", help="Origin address (e.g. your hotel)")
    dist.add_argument("destination", help="Destination address")
    dist.add_argument("--unit", choices=SUPPORTED_UNITS, default=None, help="Defaults to the configured unit")
    dist.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    dist.set_defaults(func=_cmd_distance)

    conv = sub.add_parser("convert", help="Convert a distance between km and mi.")
    conv.add_argument("value", type=float)
    conv.add_argument("--from", dest="from_unit", required=True, choices=SUPPORTED_UNITS)
    conv.add_argument("--to", dest="to_unit", required=True, choices=SUPPORTED_UNITS)
    conv.set_defaults(func=_cmd_convert)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m tripdistance.cli`."""
    settings = get_settings()
    configure_logging(settings)
    parser = build_parser()
    args = parser.parse_args(argv)
    args.settings = settings
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
