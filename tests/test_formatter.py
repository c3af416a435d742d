import pytest

from adsbviewer.models.aircraft import Coordinate
from adsbviewer.services.formatter import format_aircraft, format_model, infer_airline

OBSERVER = Coordinate(lat=43.687737, lon=-65.128691)


def test_format_aircraft_copies_feed_fields_and_derives_geometry():
    raw = {
        "flight": "ACA870  ",
        "hex": "c05e1a",
        "mdl": "Boeing 787-9",
        "t": "B789",
        "alt_baro": 37000,
        "gs": 482.3,
        "track": 71.5,
        "lat": OBSERVER.lat + 1.0,
        "lon": OBSERVER.lon,
    }

    aircraft = format_aircraft(raw, OBSERVER)

    assert aircraft.callsign == "ACA870"
    assert aircraft.icao24 == "c05e1a"
    assert aircraft.model == "Boeing 787-9 (B789)"
    assert aircraft.airline == "Air Canada"
    assert aircraft.altitude_ft == 37000
    assert aircraft.speed_kt == pytest.approx(482.3)
    assert aircraft.heading_deg == pytest.approx(71.5)
    assert aircraft.bearing_deg == 0.0
    assert aircraft.look_direction == "N"
    assert aircraft.distance_km == 111.2
    assert aircraft.origin_icao is None


def test_format_aircraft_accepts_alternate_field_names():
    raw = {
        "Call": "WJA1502",
        "Icao": "C0FFEE",
        "Op": "WestJet Encore",
        "Alt": "12000",
        "Spd": 250,
        "Trak": 180,
    }

    aircraft = format_aircraft(raw, OBSERVER)

    assert aircraft.callsign == "WJA1502"
    assert aircraft.icao24 == "C0FFEE"
    assert aircraft.airline == "WestJet Encore"
    assert aircraft.altitude_ft == 12000
    assert aircraft.speed_kt == 250
    assert aircraft.heading_deg == 180


def test_ground_altitude_and_missing_position_become_null():
    aircraft = format_aircraft(
        {"flight": "N123AB", "alt_baro": "ground", "lat": 44.0}, OBSERVER
    )

    assert aircraft.altitude_ft is None
    assert aircraft.lat == 44.0
    assert aircraft.lon is None
    assert aircraft.bearing_deg is None
    assert aircraft.look_direction is None
    assert aircraft.distance_km is None


def test_bearing_is_rounded_to_one_decimal():
    aircraft = format_aircraft({"lat": 44.3, "lon": -64.2}, OBSERVER)

    assert aircraft.bearing_deg == round(aircraft.bearing_deg, 1)
    assert 0 < aircraft.bearing_deg < 90
    assert aircraft.look_direction == "NE"


def test_bearing_just_west_of_north_rounds_to_zero():
    aircraft = format_aircraft(
        {"lat": OBSERVER.lat + 1.0, "lon": OBSERVER.lon - 0.0001}, OBSERVER
    )

    assert aircraft.bearing_deg == 0.0
    assert aircraft.look_direction == "N"


@pytest.mark.parametrize(
    "callsign, expected",
    [
        ("ACA123", "Air Canada"),
        ("wja45", "WestJet"),
        ("POE2345", "Porter Airlines"),
        ("ZZZ999", ""),
        ("N123AB", ""),
        ("", ""),
        ("123", ""),
    ],
)
def test_infer_airline(callsign, expected):
    assert infer_airline(callsign) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ({"mdl": "Airbus A320", "t": "A320"}, "Airbus A320 (A320)"),
        ({"t": "DH8D"}, "DH8D"),
        ({"mdl": "Cessna 172"}, "Cessna 172"),
        ({}, ""),
    ],
)
def test_format_model(raw, expected):
    assert format_model(raw) == expected
