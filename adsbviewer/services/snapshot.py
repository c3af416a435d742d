"""Build the aircraft snapshot for one observation location."""

from __future__ import annotations

import logging
from typing import Optional

from adsbviewer.config import settings
from adsbviewer.domain.locations import CEILING_LOCATION_KEYS, get_location
from adsbviewer.ingestors import FeedIngestor, MetarIngestor
from adsbviewer.models.aircraft import AircraftSnapshot
from adsbviewer.services.enricher import AircraftEnricher

logger = logging.getLogger("adsbviewer.services.snapshot")


class SnapshotBuilder:
    """Orchestrates feed fetch, enrichment, and cloud ceiling for a location."""

    def __init__(
        self,
        feed_ingestor: Optional[FeedIngestor] = None,
        metar_ingestor: Optional[MetarIngestor] = None,
        enricher: Optional[AircraftEnricher] = None,
    ) -> None:
        self.feed_ingestor = feed_ingestor or FeedIngestor()
        self.metar_ingestor = metar_ingestor or MetarIngestor()
        self.enricher = enricher or AircraftEnricher()

    async def build_snapshot(self, location_key: str | None) -> AircraftSnapshot:
        key, location = get_location(location_key)
        radius_km = settings.feed_radius_km

        raw_aircraft = await self.feed_ingestor.get_aircraft(
            location.lat, location.lon, radius_km
        )
        aircraft = await self.enricher.enrich(raw_aircraft)

        cloud_ceiling_ft = None
        if key in CEILING_LOCATION_KEYS:
            cloud_ceiling_ft = await self.metar_ingestor.get_cloud_ceiling()

        logger.info(
            "Snapshot for %s: %s aircraft, %s with routes",
            location.name,
            len(aircraft),
            sum(1 for ac in aircraft if ac.origin_icao),
        )

        return AircraftSnapshot(
            location_key=key,
            location=location.name,
            center_lat=location.lat,
            center_lon=location.lon,
            radius_km=radius_km,
            cloud_ceiling_ft=cloud_ceiling_ft,
            aircraft=aircraft,
        )


_default_builder: SnapshotBuilder | None = None


def get_snapshot_builder() -> SnapshotBuilder:
    global _default_builder
    if _default_builder is None:
        _default_builder = SnapshotBuilder()
    return _default_builder


async def build_snapshot(location_key: str | None) -> AircraftSnapshot:
    """Convenience wrapper using the default snapshot builder."""

    return await get_snapshot_builder().build_snapshot(location_key)


__all__ = ["SnapshotBuilder", "build_snapshot", "get_snapshot_builder"]
