"""Fixed observation locations served by the aircraft endpoint."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ObservationLocation:
    """Named centre point for a live feed query."""

    name: str
    lat: float
    lon: float


LOCATIONS: dict[str, ObservationLocation] = {
    "1": ObservationLocation(name="Port Elgin, Ontario", lat=44.434, lon=-81.393),
    "2": ObservationLocation(name="Lockeport, Nova Scotia", lat=43.700, lon=-65.117),
    "3": ObservationLocation(name="Mississauga, Ontario", lat=43.5890, lon=-79.6441),
}

DEFAULT_LOCATION_KEY = "2"

# Only the default location has a nearby METAR station configured
CEILING_LOCATION_KEYS = frozenset({"2"})


def get_location(key: str | None) -> tuple[str, ObservationLocation]:
    """Return ``(key, location)``, falling back to the default for unknown keys."""

    if key in LOCATIONS:
        return key, LOCATIONS[key]
    return DEFAULT_LOCATION_KEY, LOCATIONS[DEFAULT_LOCATION_KEY]


__all__ = [
    "CEILING_LOCATION_KEYS",
    "DEFAULT_LOCATION_KEY",
    "LOCATIONS",
    "ObservationLocation",
    "get_location",
]
