"""Route and airport reference models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RouteResult(BaseModel):
    """Origin/destination airport pair resolved for a callsign."""

    origin_icao: str = Field(..., description="ICAO code of the departure airport")
    destination_icao: str = Field(..., description="ICAO code of the arrival airport")

    model_config = ConfigDict(frozen=True)

    @field_validator("origin_icao", "destination_icao", mode="before")
    @classmethod
    def _normalize_code(cls, value):
        if value is None:
            raise ValueError("airport code is required")
        code = str(value).strip().upper()
        if not code:
            raise ValueError("airport code is required")
        return code


class AirportInfo(BaseModel):
    """City and country of an airport, keyed elsewhere by ICAO code."""

    city: str = Field(default="", description="City served by the airport")
    country_name: str = Field(default="", description="Country display name")

    model_config = ConfigDict(frozen=True)


__all__ = ["AirportInfo", "RouteResult"]
