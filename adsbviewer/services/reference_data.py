"""Airport and country reference tables used for route display names.

Both tables are downloaded once per process and kept as read-only snapshots.
A failed download leaves an empty table in place for the rest of the process
lifetime, so display names degrade to ``None`` instead of erroring.
"""

from __future__ import annotations

import asyncio
import csv
import io
import logging
from types import MappingProxyType
from typing import Mapping, Optional

import httpx

from adsbviewer.config import settings
from adsbviewer.models.route import AirportInfo

logger = logging.getLogger("adsbviewer.services.reference_data")

# OpenFlights airports.dat column positions
AIRPORT_CITY_COL = 2
AIRPORT_COUNTRY_COL = 3
AIRPORT_ICAO_COL = 5

# OpenFlights writes missing values as \N
_NULL_MARKER = "\\N"

_EMPTY: Mapping = MappingProxyType({})


def _clean(value: str) -> str:
    value = value.strip()
    return "" if value == _NULL_MARKER else value


def parse_airports(text: str) -> dict[str, AirportInfo]:
    """Parse OpenFlights-style airport rows into an ICAO-keyed table."""

    airports: dict[str, AirportInfo] = {}
    for cols in csv.reader(io.StringIO(text)):
        if len(cols) <= AIRPORT_ICAO_COL:
            continue
        icao = _clean(cols[AIRPORT_ICAO_COL])
        if not icao:
            continue
        airports[icao.upper()] = AirportInfo(
            city=_clean(cols[AIRPORT_CITY_COL]),
            country_name=_clean(cols[AIRPORT_COUNTRY_COL]),
        )
    return airports


def parse_countries(text: str) -> dict[str, str]:
    """Parse a countries CSV with ``code`` and ``name`` header columns."""

    rows = csv.reader(io.StringIO(text))
    header = next(rows, None)
    if not header:
        return {}

    header = [col.strip() for col in header]
    try:
        code_idx = header.index("code")
        name_idx = header.index("name")
    except ValueError:
        logger.warning("Countries table is missing a code or name column: %s", header)
        return {}

    countries: dict[str, str] = {}
    for cols in rows:
        if len(cols) <= max(code_idx, name_idx):
            continue
        code = cols[code_idx].strip()
        name = cols[name_idx].strip()
        if not code or not name:
            continue
        countries[name] = code
    return countries


class ReferenceDataStore:
    """Lazily loaded airport and country lookups."""

    def __init__(
        self,
        *,
        airports_url: str | None = None,
        countries_url: str | None = None,
        airports_timeout: float | None = None,
        countries_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.airports_url = airports_url or settings.airports_url
        self.countries_url = countries_url or settings.countries_url
        self.airports_timeout = airports_timeout or settings.airports_timeout
        self.countries_timeout = countries_timeout or settings.countries_timeout
        self.transport = transport

        self._airports: Optional[Mapping[str, AirportInfo]] = None
        self._countries: Optional[Mapping[str, str]] = None
        self._airports_lock = asyncio.Lock()
        self._countries_lock = asyncio.Lock()

    async def get_airports(self) -> Mapping[str, AirportInfo]:
        if self._airports is not None:
            return self._airports

        # Concurrent first callers queue here and reuse the single download
        async with self._airports_lock:
            if self._airports is None:
                text = await self._fetch_text(self.airports_url, self.airports_timeout)
                airports = _parse_or_empty(parse_airports, text, "airports")
                self._airports = MappingProxyType(airports) if airports else _EMPTY
                logger.info("Loaded %s airports", len(self._airports))
        return self._airports

    async def get_country_codes(self) -> Mapping[str, str]:
        if self._countries is not None:
            return self._countries

        async with self._countries_lock:
            if self._countries is None:
                text = await self._fetch_text(self.countries_url, self.countries_timeout)
                countries = _parse_or_empty(parse_countries, text, "countries")
                self._countries = MappingProxyType(countries) if countries else _EMPTY
                logger.info("Loaded %s country codes", len(self._countries))
        return self._countries

    async def display_name(self, icao_code: str | None) -> str | None:
        """Return ``"City, CC"`` style text for an airport, or ``None``.

        Falls back to ``"City, Country"``, then the bare city, then the bare
        country name when the ISO code or city is unknown.
        """

        if not icao_code:
            return None

        airports, countries = await asyncio.gather(
            self.get_airports(), self.get_country_codes()
        )

        info = airports.get(icao_code.strip().upper())
        if info is None:
            return None

        city = info.city or ""
        country_name = info.country_name or ""
        iso2 = countries.get(country_name) if country_name else None

        if city and iso2:
            return f"{city}, {iso2}"
        if city and country_name:
            return f"{city}, {country_name}"
        if city:
            return city
        if country_name:
            return country_name
        return None

    async def _fetch_text(self, url: str, timeout: float) -> str | None:
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Reference data request timed out for %s: %s", url, exc)
            return None
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Reference data source %s returned HTTP %s", url, exc.response.status_code
            )
            return None
        except httpx.RequestError as exc:
            logger.warning("Reference data request failed for %s: %s", url, exc)
            return None

        return response.text


def _parse_or_empty(parser, text: str | None, label: str) -> dict:
    if text is None:
        return {}
    try:
        return parser(text)
    except csv.Error as exc:
        logger.warning("Failed to parse %s table: %s", label, exc)
        return {}


_default_store: ReferenceDataStore | None = None


def get_reference_data() -> ReferenceDataStore:
    """Process-wide reference data store."""

    global _default_store
    if _default_store is None:
        _default_store = ReferenceDataStore()
    return _default_store


__all__ = ["ReferenceDataStore", "get_reference_data", "parse_airports", "parse_countries"]
