"""Live traffic feed ingestor using the ADSB.lol REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adsbviewer.config import settings

logger = logging.getLogger("adsbviewer.ingestors.feed")

KM_PER_NM = 1.852


def radius_km_to_nm(radius_km: float) -> int:
    return round(radius_km / KM_PER_NM)


class FeedIngestor:
    """Fetch raw aircraft records around a point."""

    def __init__(
        self,
        *,
        url_template: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url_template = url_template or settings.feed_url_template
        self.timeout = timeout or settings.feed_timeout
        self.transport = transport

    def build_url(self, lat: float, lon: float, radius_km: float) -> str:
        return (
            self.url_template.replace("{lat}", str(lat))
            .replace("{lon}", str(lon))
            .replace("{radius}", str(radius_km_to_nm(radius_km)))
        )

    async def get_aircraft(
        self, lat: float, lon: float, radius_km: float | None = None
    ) -> list[dict[str, Any]]:
        url = self.build_url(lat, lon, radius_km or settings.feed_radius_km)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as exc:
            logger.warning("Feed request timed out: %s", exc)
            return []
        except httpx.RequestError as exc:
            logger.warning("Feed request failed: %s", exc)
            return []

        if response.status_code == 429:
            logger.warning("Feed provider rate limit encountered: %s", response.text)
            return []
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Feed provider returned HTTP %s: %s", exc.response.status_code, exc
            )
            return []

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Failed to parse feed JSON response: %s", exc)
            return []

        raw_aircraft: list[dict[str, Any]] = []
        if isinstance(payload, dict):
            raw_aircraft = [ac for ac in payload.get("ac") or [] if isinstance(ac, dict)]

        logger.debug("Fetched %s raw aircraft records", len(raw_aircraft))
        return raw_aircraft


__all__ = ["FeedIngestor", "radius_km_to_nm"]
