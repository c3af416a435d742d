"""Models for aircraft records enriched with geometry and route metadata."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """Latitude/longitude pair in decimal degrees."""

    lat: float = Field(..., description="Latitude in decimal degrees")
    lon: float = Field(..., description="Longitude in decimal degrees")

    model_config = ConfigDict(frozen=True)


class EnrichedAircraft(BaseModel):
    """Formatted feed record plus derived and route fields."""

    callsign: str = Field(default="", description="Broadcast callsign, trimmed")
    icao24: str = Field(default="", description="Transponder hex identifier")
    model: str = Field(default="", description="Aircraft model and type code")
    airline: str = Field(default="", description="Operator name, given or inferred")
    altitude_ft: Optional[float] = Field(default=None, description="Barometric altitude in feet")
    speed_kt: Optional[float] = Field(default=None, description="Ground speed in knots")
    lat: Optional[float] = Field(default=None, description="Latitude in decimal degrees")
    lon: Optional[float] = Field(default=None, description="Longitude in decimal degrees")
    heading_deg: Optional[float] = Field(default=None, description="Ground track in degrees")

    bearing_deg: Optional[float] = Field(
        default=None, description="Bearing from the observer, rounded to 0.1 degree"
    )
    look_direction: Optional[str] = Field(
        default=None, description="8-point compass direction from the observer"
    )
    distance_km: Optional[float] = Field(
        default=None, description="Great-circle distance from the observer"
    )

    origin_icao: Optional[str] = Field(default=None, description="Departure airport ICAO")
    destination_icao: Optional[str] = Field(default=None, description="Arrival airport ICAO")
    origin_display: Optional[str] = Field(default=None, description="Departure city display name")
    destination_display: Optional[str] = Field(
        default=None, description="Arrival city display name"
    )

    model_config = ConfigDict(extra="ignore")


class AircraftSnapshot(BaseModel):
    """All enriched aircraft around one observation location."""

    location_key: str = Field(..., description="Key of the observation location")
    location: str = Field(..., description="Display name of the observation location")
    center_lat: float = Field(..., description="Latitude of the feed query centre")
    center_lon: float = Field(..., description="Longitude of the feed query centre")
    radius_km: float = Field(..., description="Feed query radius in kilometres")
    cloud_ceiling_ft: Optional[float] = Field(
        default=None, description="Lowest broken/overcast layer near the location"
    )
    aircraft: list[EnrichedAircraft] = Field(default_factory=list)


__all__ = ["AircraftSnapshot", "Coordinate", "EnrichedAircraft"]
