"""Normalize raw live-feed records into display-ready aircraft rows."""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from adsbviewer.domain.airlines import AIRLINE_BY_ICAO_PREFIX
from adsbviewer.models.aircraft import Coordinate, EnrichedAircraft
from adsbviewer.services import geo

_NON_LETTERS_RE = re.compile(r"[^A-Za-z]")


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _text(raw: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if value:
            return str(value).strip()
    return ""


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        # e.g. alt_baro == "ground"
        return None
    return number if math.isfinite(number) else None


def infer_airline(callsign: str) -> str:
    """Operator name from the callsign's 3-letter prefix, or ``""``."""

    letters = _NON_LETTERS_RE.sub("", callsign or "").upper()
    if not letters:
        return ""
    return AIRLINE_BY_ICAO_PREFIX.get(letters[:3], "")


def format_model(raw: Mapping[str, Any]) -> str:
    mdl = _text(raw, "mdl", "Mdl")
    type_code = _text(raw, "t", "Type")
    if mdl and type_code:
        return f"{mdl} ({type_code})"
    return mdl or type_code


def format_aircraft(raw: Mapping[str, Any], observer: Coordinate) -> EnrichedAircraft:
    """Copy the feed fields we display and derive geometry from ``observer``."""

    callsign = _text(raw, "flight", "Call")
    airline = _text(raw, "Op", "op", "operator") or infer_airline(callsign)

    lat = _number(raw.get("lat"))
    lon = _number(raw.get("lon"))

    bearing_deg = look_direction = distance_km = None
    if lat is not None and lon is not None:
        target = Coordinate(lat=lat, lon=lon)
        bearing = geo.bearing(observer, target)
        bearing_deg = round(bearing, 1) % 360.0
        look_direction = geo.direction(bearing)
        distance_km = round(geo.distance(observer, target), 1)

    return EnrichedAircraft(
        callsign=callsign,
        icao24=_text(raw, "hex", "Icao"),
        model=format_model(raw),
        airline=airline,
        altitude_ft=_number(_first(raw, "alt_baro", "Alt")),
        speed_kt=_number(_first(raw, "gs", "Spd")),
        lat=lat,
        lon=lon,
        heading_deg=_number(_first(raw, "track", "trak", "Trak")),
        bearing_deg=bearing_deg,
        look_direction=look_direction,
        distance_km=distance_km,
    )


__all__ = ["format_aircraft", "format_model", "infer_airline"]
