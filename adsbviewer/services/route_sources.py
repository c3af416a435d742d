"""Route lookup adapters that turn a callsign into an origin/destination pair.

Each adapter returns a :class:`RouteResult` or ``None``. Upstream failures are
logged and reported as ``None``; nothing here raises to the resolver.
"""

from __future__ import annotations

import asyncio
import csv
import io
import logging
import re
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Protocol
from urllib.parse import quote

import httpx

from adsbviewer.config import settings
from adsbviewer.domain.airlines import ICAO_TO_IATA_AIRLINE
from adsbviewer.models.route import RouteResult

logger = logging.getLogger("adsbviewer.services.route_sources")

SOURCE_ADSBDB = "adsbdb"
SOURCE_AERODATABOX = "aerodatabox"
SOURCE_AVIATIONSTACK = "aviationstack"
SOURCE_STATIC_CSV = "opensky_static"

# 2-3 letter ICAO airline prefix followed by a 1-4 digit flight number
FLIGHT_NUMBER_RE = re.compile(r"^(?P<prefix>[A-Z]{2,3})(?P<number>\d{1,4})$")

# Upstream schemas name the same things differently depending on endpoint version
AIRPORT_CODE_KEYS: tuple[str, ...] = ("icao", "icaoCode", "icao_code", "airportIcao")
AIRPORT_CONTAINER_KEYS: tuple[str, ...] = ("airport",)
DEPARTURE_KEYS: tuple[str, ...] = ("departure", "origin", "dep")
ARRIVAL_KEYS: tuple[str, ...] = ("arrival", "destination", "arr")
FLAT_DEPARTURE_CODE_KEYS: tuple[str, ...] = ("dep_icao", "departureIcao", "origin_icao")
FLAT_ARRIVAL_CODE_KEYS: tuple[str, ...] = ("arr_icao", "arrivalIcao", "destination_icao")
FLIGHT_LIST_KEYS: tuple[str, ...] = ("items", "data", "flights")

STATIC_CALLSIGN_COLUMNS: tuple[str, ...] = ("callsign",)
STATIC_ORIGIN_COLUMNS: tuple[str, ...] = (
    "origin",
    "originairport",
    "origin_airport",
    "departureairport",
    "departure_airport",
    "estdepartureairport",
)
STATIC_DESTINATION_COLUMNS: tuple[str, ...] = (
    "destination",
    "destinationairport",
    "destination_airport",
    "arrivalairport",
    "arrival_airport",
    "estarrivalairport",
)


class RouteSource(Protocol):
    """Interface shared by all route lookup adapters."""

    name: str

    @property
    def enabled(self) -> bool:
        """Whether the adapter is configured and may be queried."""

    async def lookup(self, callsign: str) -> Optional[RouteResult]:
        """Resolve a normalized callsign, or return ``None``."""


def probe(payload: Any, keys: Iterable[str]) -> Any:
    """Return the first non-empty value found under ``keys`` in a mapping."""

    if not isinstance(payload, Mapping):
        return None
    for key in keys:
        value = payload.get(key)
        if value not in (None, "", [], {}):
            return value
    return None


def airport_code(endpoint: Any) -> Optional[str]:
    """Extract an ICAO code from a departure/arrival block or a bare string."""

    if isinstance(endpoint, str):
        return endpoint.strip() or None
    code = probe(endpoint, AIRPORT_CODE_KEYS)
    if code is None:
        code = probe(probe(endpoint, AIRPORT_CONTAINER_KEYS), AIRPORT_CODE_KEYS)
    if code is None:
        return None
    code = str(code).strip()
    return code or None


def _endpoint_code(flight: Mapping, *key_groups: tuple[str, ...]) -> Optional[str]:
    for keys in key_groups:
        for key in keys:
            code = airport_code(flight.get(key))
            if code:
                return code
    return None


def route_from_flight(flight: Any) -> Optional[RouteResult]:
    """Build a route from one flight record, trying every known field alias."""

    if not isinstance(flight, Mapping):
        return None
    origin = _endpoint_code(flight, DEPARTURE_KEYS, FLAT_DEPARTURE_CODE_KEYS)
    destination = _endpoint_code(flight, ARRIVAL_KEYS, FLAT_ARRIVAL_CODE_KEYS)
    if not origin or not destination:
        return None
    return RouteResult(origin_icao=origin, destination_icao=destination)


def iata_flight_code(callsign: str) -> Optional[str]:
    """Translate ``ACA123`` into ``AC123`` when the airline prefix is known."""

    match = FLIGHT_NUMBER_RE.match(callsign)
    if not match:
        return None
    iata = ICAO_TO_IATA_AIRLINE.get(match.group("prefix"))
    if not iata:
        return None
    return f"{iata}{match.group('number')}"


def flight_number_candidates(callsign: str) -> list[str]:
    """Query codes to try for a flight-number lookup, ICAO form first."""

    if not FLIGHT_NUMBER_RE.match(callsign):
        return []
    candidates = [callsign]
    iata = iata_flight_code(callsign)
    if iata and iata not in candidates:
        candidates.append(iata)
    return candidates


def _flight_list(payload: Any) -> list:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        nested = probe(payload, FLIGHT_LIST_KEYS)
        if isinstance(nested, list):
            return nested
        return [payload]
    return []


class HttpRouteSource:
    """Common HTTP handling for the remote route adapters."""

    name = "http"

    def __init__(
        self,
        *,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return True

    async def _get_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        label: str,
    ) -> Any:
        """GET ``url`` and decode JSON; ``None`` for 404 and for every failure."""

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("%s request timed out for %s: %s", self.name, label, exc)
            return None
        except httpx.RequestError as exc:
            logger.warning("%s request failed for %s: %s", self.name, label, exc)
            return None

        if response.status_code == 404:
            logger.debug("%s has no record for %s", self.name, label)
            return None
        if response.status_code == 429:
            logger.warning("%s rate limit encountered for %s", self.name, label)
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "%s returned HTTP %s for %s: %s",
                self.name,
                exc.response.status_code,
                label,
                exc.response.text[:200],
            )
            return None

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Failed to parse %s JSON for %s: %s", self.name, label, exc)
            return None


class AdsbdbRouteSource(HttpRouteSource):
    """Free callsign route API (adsbdb.com), no credential required."""

    name = SOURCE_ADSBDB

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout or settings.adsbdb_timeout, transport=transport)
        self.base_url = base_url or settings.adsbdb_base_url

    async def lookup(self, callsign: str) -> Optional[RouteResult]:
        if not callsign:
            return None

        url = self.base_url.rstrip("/") + "/" + quote(callsign, safe="")
        data = await self._get_json(url, label=callsign)
        if not isinstance(data, Mapping):
            return None

        # adsbdb v0 wraps the route as response.flightroute
        wrapped = data.get("response")
        if isinstance(wrapped, Mapping) and isinstance(wrapped.get("flightroute"), Mapping):
            data = wrapped["flightroute"]

        origin = airport_code(data.get("origin"))
        destination = airport_code(data.get("destination"))
        nested = data.get("route")
        if (not origin or not destination) and isinstance(nested, Mapping):
            origin = origin or airport_code(nested.get("origin"))
            destination = destination or airport_code(nested.get("destination"))

        if not origin or not destination:
            return None
        return RouteResult(origin_icao=origin, destination_icao=destination)


class AeroDataBoxRouteSource(HttpRouteSource):
    """Commercial flight-number API; needs ICAO/IATA flight-number candidates."""

    name = SOURCE_AERODATABOX

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        host: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            timeout=timeout or settings.aerodatabox_timeout, transport=transport
        )
        self.api_key = api_key if api_key is not None else settings.aerodatabox_api_key
        self.base_url = base_url or settings.aerodatabox_base_url
        self.host = host or settings.aerodatabox_host

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def lookup(self, callsign: str) -> Optional[RouteResult]:
        if not self.enabled or not callsign:
            return None

        headers = {"X-RapidAPI-Key": self.api_key, "X-RapidAPI-Host": self.host}
        for candidate in flight_number_candidates(callsign):
            url = self.base_url.rstrip("/") + "/" + quote(candidate, safe="")
            payload = await self._get_json(url, headers=headers, label=candidate)
            for flight in _flight_list(payload):
                route = route_from_flight(flight)
                if route is not None:
                    logger.debug("%s matched %s via %s", self.name, callsign, candidate)
                    return route
        return None


class AviationStackRouteSource(HttpRouteSource):
    """Commercial flight-search API (aviationstack.com)."""

    name = SOURCE_AVIATIONSTACK

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            timeout=timeout or settings.aviationstack_timeout, transport=transport
        )
        self.api_key = api_key if api_key is not None else settings.aviationstack_api_key
        self.base_url = base_url or settings.aviationstack_base_url

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def lookup(self, callsign: str) -> Optional[RouteResult]:
        if not self.enabled or not callsign:
            return None

        params = {"access_key": self.api_key, "flight_icao": callsign}
        flight_iata = iata_flight_code(callsign)
        if flight_iata:
            params["flight_iata"] = flight_iata

        body = await self._get_json(self.base_url, params=params, label=callsign)
        if not isinstance(body, Mapping):
            return None
        if body.get("error"):
            logger.warning("%s error for %s: %s", self.name, callsign, body["error"])
            return None

        flights = body.get("data")
        if not isinstance(flights, list) or not flights:
            return None
        return route_from_flight(flights[0])


def _find_column(header: list[str], names: tuple[str, ...], *, substring: str | None = None) -> int:
    for idx, col in enumerate(header):
        if col in names:
            return idx
    if substring:
        for idx, col in enumerate(header):
            if substring in col:
                return idx
    return -1


def parse_static_routes(text: str) -> dict[str, RouteResult]:
    """Parse a callsign routes CSV, locating columns by header name."""

    rows = csv.reader(io.StringIO(text))
    header = next(rows, None)
    if not header:
        return {}

    lower_header = [(col or "").strip().lower() for col in header]
    callsign_idx = _find_column(lower_header, STATIC_CALLSIGN_COLUMNS, substring="callsign")
    origin_idx = _find_column(lower_header, STATIC_ORIGIN_COLUMNS)
    dest_idx = _find_column(lower_header, STATIC_DESTINATION_COLUMNS)
    if callsign_idx < 0 or origin_idx < 0 or dest_idx < 0:
        logger.warning("Static routes CSV lacks callsign/origin/destination columns")
        return {}

    routes: dict[str, RouteResult] = {}
    width = max(callsign_idx, origin_idx, dest_idx)
    for cols in rows:
        if len(cols) <= width:
            continue
        key = re.sub(r"\s+", "", cols[callsign_idx]).upper()
        origin = cols[origin_idx].strip()
        destination = cols[dest_idx].strip()
        if not key or not origin or not destination or key in routes:
            continue
        routes[key] = RouteResult(origin_icao=origin, destination_icao=destination)
    return routes


class StaticRoutesSource:
    """Routes from a locally downloaded OpenSky callsign/route CSV."""

    name = SOURCE_STATIC_CSV

    def __init__(self, csv_path: str | Path | None = None) -> None:
        self.csv_path = Path(csv_path or settings.static_routes_csv_path)
        self._routes: Optional[dict[str, RouteResult]] = None
        self._lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.csv_path.is_file()

    async def lookup(self, callsign: str) -> Optional[RouteResult]:
        if not callsign:
            return None
        routes = await self._load()
        return routes.get(re.sub(r"\s+", "", callsign).upper())

    async def _load(self) -> dict[str, RouteResult]:
        if self._routes is not None:
            return self._routes

        async with self._lock:
            if self._routes is None:
                self._routes = await asyncio.to_thread(self._read_routes)
        return self._routes

    def _read_routes(self) -> dict[str, RouteResult]:
        if not self.csv_path.is_file():
            logger.warning("Static routes file not found at %s", self.csv_path)
            return {}
        try:
            text = self.csv_path.read_text(encoding="utf-8", errors="ignore")
            routes = parse_static_routes(text)
        except (OSError, csv.Error) as exc:
            logger.error("Failed to load static routes from %s: %s", self.csv_path, exc)
            return {}
        logger.info("Loaded %s static routes from %s", len(routes), self.csv_path)
        return routes


def default_route_sources() -> list[RouteSource]:
    """Adapters in their cold-start order."""

    return [
        AdsbdbRouteSource(),
        AeroDataBoxRouteSource(),
        AviationStackRouteSource(),
        StaticRoutesSource(),
    ]


__all__ = [
    "AIRPORT_CODE_KEYS",
    "AdsbdbRouteSource",
    "AeroDataBoxRouteSource",
    "AviationStackRouteSource",
    "FLIGHT_NUMBER_RE",
    "RouteSource",
    "SOURCE_ADSBDB",
    "SOURCE_AERODATABOX",
    "SOURCE_AVIATIONSTACK",
    "SOURCE_STATIC_CSV",
    "StaticRoutesSource",
    "airport_code",
    "default_route_sources",
    "flight_number_candidates",
    "iata_flight_code",
    "parse_static_routes",
    "probe",
    "route_from_flight",
]
