"""Attach geometry, route, and airport display names to a batch of aircraft."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Mapping, Optional, Union

from adsbviewer.config import settings
from adsbviewer.models.aircraft import Coordinate, EnrichedAircraft
from adsbviewer.services.formatter import format_aircraft
from adsbviewer.services.reference_data import ReferenceDataStore, get_reference_data
from adsbviewer.services.route_resolver import RouteResolver, get_route_resolver

logger = logging.getLogger("adsbviewer.services.enricher")

AircraftRecord = Union[Mapping[str, Any], EnrichedAircraft]


class AircraftEnricher:
    """Fan out route resolution across aircraft records and collect the results."""

    def __init__(
        self,
        resolver: Optional[RouteResolver] = None,
        reference_data: Optional[ReferenceDataStore] = None,
        observer: Optional[Coordinate] = None,
    ) -> None:
        self.resolver = resolver or get_route_resolver()
        self.reference_data = reference_data or get_reference_data()
        self.observer = observer or Coordinate(
            lat=settings.observer_lat, lon=settings.observer_lon
        )

    async def enrich(self, records: Iterable[AircraftRecord]) -> list[EnrichedAircraft]:
        """Enrich every record concurrently; output order matches input order."""

        aircraft = [self._format(record) for record in records]
        return list(await asyncio.gather(*(self._enrich_one(ac) for ac in aircraft)))

    def _format(self, record: AircraftRecord) -> EnrichedAircraft:
        if isinstance(record, EnrichedAircraft):
            return record.model_copy()
        if not isinstance(record, Mapping):
            logger.warning("Skipping malformed aircraft record: %r", record)
            return EnrichedAircraft()
        return format_aircraft(record, self.observer)

    async def _enrich_one(self, aircraft: EnrichedAircraft) -> EnrichedAircraft:
        if not aircraft.callsign:
            return aircraft

        try:
            route = await self.resolver.resolve_route(aircraft.callsign)
            if route is None:
                return aircraft

            origin_display, destination_display = await asyncio.gather(
                self.reference_data.display_name(route.origin_icao),
                self.reference_data.display_name(route.destination_icao),
            )
        except Exception as exc:
            logger.warning("Error enriching aircraft %s: %s", aircraft.callsign, exc)
            return aircraft

        return aircraft.model_copy(
            update={
                "origin_icao": route.origin_icao,
                "destination_icao": route.destination_icao,
                "origin_display": origin_display,
                "destination_display": destination_display,
            }
        )


async def enrich(records: Iterable[AircraftRecord]) -> list[EnrichedAircraft]:
    """Convenience wrapper using the process-wide resolver and reference data."""

    return await AircraftEnricher().enrich(records)


__all__ = ["AircraftEnricher", "enrich"]
