import asyncio
import logging

import httpx
import pytest

from tripdistance.config.settings import Settings
from tripdistance.core.geo import GeoPoint
from tripdistance.distance.engine import DistanceEngine
from tripdistance.domain.models import Distance, Unresolved
from tripdistance.ingestion.geocoding_client import GeocodingClient

KNOWN_PLACES = {
    "New York": GeoPoint(lat=40.7128, lon=-74.0060),
    "Los Angeles": GeoPoint(lat=34.0522, lon=-118.2437),
    "Chicago": GeoPoint(lat=41.8781, lon=-87.6298),
    "London": GeoPoint(lat=51.5074, lon=-0.1278),
    "Paris": GeoPoint(lat=48.8566, lon=2.3522),
}


class StubGeocoder:
    def __init__(self, places: dict[str, GeoPoint] | None = None):
        self.places = KNOWN_PLACES if places is None else places
        self.calls: list[str] = []

    async def lookup(self, address: str):
        self.calls.append(address)
        # Yield so concurrent callers interleave.
        await asyncio.sleep(0)
        point = self.places.get(address)
        if point is None:
            return Unresolved(address=address, reason="not_found")
        return point


def _engine(geocoder=None, **distance) -> DistanceEngine:
    settings = Settings(distance=distance) if distance else Settings()
    return DistanceEngine(settings, geocoder=geocoder or StubGeocoder())


def test_measure_new_york_to_los_angeles_in_km():
    outcome = asyncio.run(_engine().measure("New York", "Los Angeles", "km"))
    assert isinstance(outcome, Distance)
    assert outcome.unit == "km"
    assert outcome.value == pytest.approx(3935.75, abs=5)
    assert outcome.value == round(outcome.value, 1)


def test_compute_distance_new_york_to_los_angeles_in_miles():
    value = asyncio.run(_engine().compute_distance("New York", "Los Angeles", "mi"))
    assert value == pytest.approx(2445.6, abs=5)
    assert value == round(value, 1)


def test_default_unit_is_miles():
    engine = _engine()
    assert engine.default_unit == "mi"
    outcome = asyncio.run(engine.measure("New York", "Los Angeles"))
    assert outcome.unit == "mi"


def test_configured_default_unit_is_used():
    outcome = asyncio.run(_engine(default_unit="km").measure("London", "Paris"))
    assert outcome.unit == "km"
    assert outcome.value == pytest.approx(343.5, abs=2)


def test_same_address_yields_zero():
    assert asyncio.run(_engine().compute_distance("Paris", "Paris", "km")) == 0.0


def test_both_lookups_are_issued():
    geocoder = StubGeocoder()
    asyncio.run(_engine(geocoder).measure("London", "Paris", "km"))
    assert sorted(geocoder.calls) == ["London", "Paris"]


@pytest.mark.parametrize("origin,destination", [("Atlantis", "Paris"), ("Paris", "Atlantis"), ("", "")])
def test_unresolved_address_returns_zero(origin, destination, caplog):
    engine = _engine()
    with caplog.at_level(logging.WARNING, logger="tripdistance.distance.engine"):
        value = asyncio.run(engine.compute_distance(origin, destination, "km"))
    assert value == 0.0
    assert "Distance unknown" in caplog.text


def test_measure_keeps_unresolved_outcome_explicit():
    outcome = asyncio.run(_engine().measure("Paris", "Atlantis", "mi"))
    assert outcome == Unresolved(address="Atlantis", reason="not_found")


def test_unknown_unit_is_rejected_before_lookup():
    geocoder = StubGeocoder()
    with pytest.raises(ValueError):
        asyncio.run(_engine(geocoder).compute_distance("London", "Paris", "meters"))
    assert geocoder.calls == []


def test_concurrent_invocations_do_not_share_state():
    engine = _engine()
    pairs = [
        ("New York", "Los Angeles", "km"),
        ("London", "Paris", "mi"),
        ("Chicago", "New York", "km"),
        ("Paris", "Atlantis", "mi"),
        ("Los Angeles", "Chicago", "mi"),
    ]

    async def run_all():
        return await asyncio.gather(*(engine.compute_distance(o, d, u) for o, d, u in pairs))

    concurrent = asyncio.run(run_all())
    sequential = [asyncio.run(engine.compute_distance(o, d, u)) for o, d, u in pairs]

    assert concurrent == sequential
    assert concurrent[3] == 0.0
    assert len(set(concurrent)) == len(pairs)


def test_module_level_compute_distance_uses_process_settings(monkeypatch):
    import tripdistance.distance.engine as engine_module

    monkeypatch.setattr(engine_module, "GeocodingClient", lambda settings: StubGeocoder())
    value = asyncio.run(engine_module.compute_distance("New York", "Los Angeles", "km"))
    assert value == pytest.approx(3935.75, abs=5)


@pytest.mark.parametrize("address", ["a" * 70_000, "\ud800 street"], ids=["too-long", "lone-surrogate"])
def test_compute_distance_with_unencodable_address_returns_zero(address):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"lat": "48.8566", "lon": "2.3522"}])

    geocoder = GeocodingClient(Settings(), transport=httpx.MockTransport(handler))
    engine = DistanceEngine(Settings(), geocoder=geocoder)

    assert asyncio.run(engine.compute_distance(address, "Paris", "km")) == 0.0
    assert asyncio.run(engine.compute_distance("Paris", address, "mi")) == 0.0
