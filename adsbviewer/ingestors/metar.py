"""Cloud ceiling lookup using the AviationWeather METAR API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from adsbviewer.config import settings

logger = logging.getLogger("adsbviewer.ingestors.metar")

CEILING_COVERS = frozenset({"BKN", "OVC"})


def lowest_ceiling_ft(layers: Any) -> Optional[float]:
    """Lowest broken or overcast layer base in feet (bases are reported in hundreds)."""

    if not isinstance(layers, list):
        return None

    lowest: Optional[float] = None
    for layer in layers:
        if not isinstance(layer, dict):
            continue
        cover = layer.get("cover")
        base = layer.get("base")
        if cover not in CEILING_COVERS or base is None:
            continue
        try:
            base_ft = float(base) * 100
        except (TypeError, ValueError):
            continue
        if lowest is None or base_ft < lowest:
            lowest = base_ft
    return lowest


class MetarIngestor:
    """Fetch the current cloud ceiling for a METAR station."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        station: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.metar_url
        self.station = station or settings.metar_station
        self.timeout = timeout or settings.metar_timeout
        self.transport = transport

    async def get_cloud_ceiling(self) -> Optional[float]:
        params = {"ids": self.station, "format": "json"}
        headers = {"User-Agent": "adsbviewer (ops@example.com)"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.base_url, params=params, headers=headers)
                response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as exc:
            logger.warning("METAR request timed out: %s", exc)
            return None
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "METAR service returned error: status=%s", exc.response.status_code
            )
            return None
        except httpx.RequestError as exc:
            logger.warning("METAR request failed: %s", exc)
            return None
        except ValueError as exc:
            logger.warning("Failed to parse METAR JSON response: %s", exc)
            return None

        if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
            return None

        # Newer API responses name the layer list "clouds"
        metar = payload[0]
        layers = metar.get("skyCondition")
        if layers is None:
            layers = metar.get("clouds")
        return lowest_ceiling_ft(layers)


__all__ = ["MetarIngestor", "lowest_ceiling_ft"]
