import asyncio

import pytest

from adsbviewer.models.aircraft import Coordinate, EnrichedAircraft
from adsbviewer.models.route import RouteResult
from adsbviewer.services.enricher import AircraftEnricher

OBSERVER = Coordinate(lat=43.687737, lon=-65.128691)


class FakeResolver:
    def __init__(self, routes=None, failing=()):
        self.routes = routes or {}
        self.failing = set(failing)
        self.calls = []

    async def resolve_route(self, callsign):
        self.calls.append(callsign)
        # Let other records interleave
        await asyncio.sleep(0)
        if callsign in self.failing:
            raise RuntimeError(f"lookup failed for {callsign}")
        return self.routes.get(callsign)


class FakeReferenceData:
    def __init__(self, names=None):
        self.names = names or {}
        self.calls = []

    async def display_name(self, icao_code):
        self.calls.append(icao_code)
        return self.names.get(icao_code)


def build_enricher(resolver, reference_data=None):
    return AircraftEnricher(
        resolver=resolver,
        reference_data=reference_data or FakeReferenceData(),
        observer=OBSERVER,
    )


@pytest.mark.anyio
async def test_enrich_attaches_route_and_display_names():
    resolver = FakeResolver(
        {"ACA123": RouteResult(origin_icao="CYYZ", destination_icao="LFPG")}
    )
    reference = FakeReferenceData({"CYYZ": "Toronto, CA", "LFPG": "Paris, FR"})
    enricher = build_enricher(resolver, reference)

    [aircraft] = await enricher.enrich(
        [{"flight": "ACA123  ", "hex": "c0ffee", "lat": 44.0, "lon": -65.0, "alt_baro": 35000}]
    )

    assert aircraft.callsign == "ACA123"
    assert aircraft.origin_icao == "CYYZ"
    assert aircraft.destination_icao == "LFPG"
    assert aircraft.origin_display == "Toronto, CA"
    assert aircraft.destination_display == "Paris, FR"
    assert aircraft.airline == "Air Canada"
    assert aircraft.altitude_ft == 35000
    assert aircraft.distance_km is not None
    assert sorted(reference.calls) == ["CYYZ", "LFPG"]


@pytest.mark.anyio
async def test_enrich_preserves_input_order():
    routes = {
        f"ACA{n}": RouteResult(origin_icao="CYYZ", destination_icao=f"K{n:03d}")
        for n in range(5)
    }
    enricher = build_enricher(FakeResolver(routes))

    result = await enricher.enrich([{"flight": f"ACA{n}"} for n in range(5)])

    assert [ac.callsign for ac in result] == [f"ACA{n}" for n in range(5)]
    assert [ac.destination_icao for ac in result] == [f"K{n:03d}" for n in range(5)]


@pytest.mark.anyio
async def test_one_failing_record_does_not_affect_others():
    resolver = FakeResolver(
        {
            "ACA1": RouteResult(origin_icao="CYYZ", destination_icao="CYHZ"),
            "WJA2": RouteResult(origin_icao="CYYC", destination_icao="CYVR"),
        },
        failing={"DAL3"},
    )
    enricher = build_enricher(resolver)

    result = await enricher.enrich(
        [{"flight": "ACA1"}, {"flight": "DAL3", "hex": "abc123"}, {"flight": "WJA2"}]
    )

    assert len(result) == 3
    assert result[0].origin_icao == "CYYZ"
    assert result[2].origin_icao == "CYYC"
    failed = result[1]
    assert failed.callsign == "DAL3"
    assert failed.icao24 == "abc123"
    assert failed.origin_icao is None
    assert failed.destination_display is None


@pytest.mark.anyio
async def test_records_without_callsign_skip_resolution():
    resolver = FakeResolver()
    enricher = build_enricher(resolver)

    [aircraft] = await enricher.enrich([{"hex": "abc123", "flight": "   "}])

    assert resolver.calls == []
    assert aircraft.callsign == ""
    assert aircraft.origin_icao is None


@pytest.mark.anyio
async def test_unresolved_route_leaves_route_fields_empty():
    reference = FakeReferenceData()
    enricher = build_enricher(FakeResolver(), reference)

    [aircraft] = await enricher.enrich([{"flight": "ZZZ999"}])

    assert aircraft.callsign == "ZZZ999"
    assert aircraft.origin_icao is None
    assert aircraft.destination_icao is None
    assert aircraft.origin_display is None
    assert reference.calls == []


@pytest.mark.anyio
async def test_missing_position_leaves_geometry_empty():
    enricher = build_enricher(FakeResolver())

    [aircraft] = await enricher.enrich([{"flight": "ACA1", "lat": None, "lon": -65.0}])

    assert aircraft.lat is None
    assert aircraft.bearing_deg is None
    assert aircraft.look_direction is None
    assert aircraft.distance_km is None


@pytest.mark.anyio
async def test_unknown_airport_gives_null_display_name():
    resolver = FakeResolver({"ACA1": RouteResult(origin_icao="CYYZ", destination_icao="XXXX")})
    reference = FakeReferenceData({"CYYZ": "Toronto, CA"})
    enricher = build_enricher(resolver, reference)

    [aircraft] = await enricher.enrich([{"flight": "ACA1"}])

    assert aircraft.origin_display == "Toronto, CA"
    assert aircraft.destination_icao == "XXXX"
    assert aircraft.destination_display is None


@pytest.mark.anyio
async def test_accepts_preformatted_aircraft_and_skips_malformed_records():
    resolver = FakeResolver({"ACA1": RouteResult(origin_icao="CYYZ", destination_icao="CYHZ")})
    enricher = build_enricher(resolver)
    formatted = EnrichedAircraft(callsign="ACA1", icao24="c0ffee")

    result = await enricher.enrich([formatted, "not a record"])

    assert result[0].origin_icao == "CYYZ"
    assert formatted.origin_icao is None
    assert result[1] == EnrichedAircraft()


@pytest.mark.anyio
async def test_empty_batch():
    enricher = build_enricher(FakeResolver())

    assert await enricher.enrich([]) == []
