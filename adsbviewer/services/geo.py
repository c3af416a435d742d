"""Great-circle geometry between the observer and an aircraft."""

from __future__ import annotations

import math

from adsbviewer.models.aircraft import Coordinate

EARTH_RADIUS_KM = 6371.0

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def bearing(observer: Coordinate, target: Coordinate) -> float:
    """Initial great-circle bearing in degrees, normalized to [0, 360)."""

    phi1 = math.radians(observer.lat)
    phi2 = math.radians(target.lat)
    d_lon = math.radians(target.lon - observer.lon)

    x = math.sin(d_lon) * math.cos(phi2)
    y = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lon)

    result = math.degrees(math.atan2(x, y)) % 360.0
    # A tiny negative angle wraps to exactly 360.0 in floating point
    return 0.0 if result >= 360.0 else result


def distance(observer: Coordinate, target: Coordinate) -> float:
    """Haversine distance in kilometres."""

    phi1 = math.radians(observer.lat)
    phi2 = math.radians(target.lat)
    d_phi = phi2 - phi1
    d_lon = math.radians(target.lon - observer.lon)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def direction(bearing_deg: float) -> str:
    """Bucket a bearing into one of eight compass points."""

    idx = math.floor((bearing_deg + 22.5) / 45) % 8
    return COMPASS_POINTS[idx]


__all__ = ["COMPASS_POINTS", "EARTH_RADIUS_KM", "bearing", "direction", "distance"]
