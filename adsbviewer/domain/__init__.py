"""Static domain tables for callsigns and observation locations."""

from .airlines import AIRLINE_BY_ICAO_PREFIX, ICAO_TO_IATA_AIRLINE
from .locations import (
    CEILING_LOCATION_KEYS,
    DEFAULT_LOCATION_KEY,
    LOCATIONS,
    ObservationLocation,
    get_location,
)

__all__ = [
    "AIRLINE_BY_ICAO_PREFIX",
    "CEILING_LOCATION_KEYS",
    "DEFAULT_LOCATION_KEY",
    "ICAO_TO_IATA_AIRLINE",
    "LOCATIONS",
    "ObservationLocation",
    "get_location",
]
