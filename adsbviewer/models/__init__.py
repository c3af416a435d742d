"""Pydantic models for the ADSB viewer backend."""

from .aircraft import AircraftSnapshot, Coordinate, EnrichedAircraft
from .route import AirportInfo, RouteResult

__all__ = [
    "AircraftSnapshot",
    "AirportInfo",
    "Coordinate",
    "EnrichedAircraft",
    "RouteResult",
]
