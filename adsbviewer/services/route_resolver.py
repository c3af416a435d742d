"""Adaptive, cached callsign -> route resolution over several route sources."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional, Sequence

from adsbviewer.config import settings
from adsbviewer.models.route import RouteResult
from adsbviewer.services.route_sources import RouteSource, default_route_sources

logger = logging.getLogger("adsbviewer.services.route_resolver")

DEFAULT_AIRLINE_KEY = "_default"

_AIRLINE_PREFIX_RE = re.compile(r"^[A-Z]+")


def normalize_callsign(callsign: str | None) -> str:
    if not callsign:
        return ""
    return callsign.strip().upper()


def airline_key(callsign: str) -> str:
    """Leading run of letters in a normalized callsign, e.g. ``ACA`` for ``ACA123``."""

    match = _AIRLINE_PREFIX_RE.match(callsign)
    return match.group(0) if match else DEFAULT_AIRLINE_KEY


class RouteResolver:
    """Resolve callsigns through route sources ordered by per-airline success.

    Results, including misses, are memoized for the lifetime of the instance.
    Each airline key keeps a success count per source; sources are tried in
    descending count order with the constructor order breaking ties.
    """

    def __init__(
        self,
        sources: Sequence[RouteSource] | None = None,
        *,
        failure_decay: float | None = None,
    ) -> None:
        self.sources: list[RouteSource] = list(
            sources if sources is not None else default_route_sources()
        )
        self.failure_decay = (
            failure_decay if failure_decay is not None else settings.route_stats_failure_decay
        )
        self._cache: dict[str, Optional[RouteResult]] = {}
        self._stats: dict[str, dict[str, float]] = {}
        self._inflight: dict[str, asyncio.Task] = {}

    async def resolve_route(self, callsign: str | None) -> Optional[RouteResult]:
        key = normalize_callsign(callsign)
        if not key:
            return None

        if key in self._cache:
            return self._cache[key]

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._resolve_uncached(key))
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(task)

    def source_order(self, airline: str) -> list[RouteSource]:
        """Sources sorted by recorded successes for ``airline``, best first."""

        counts = self._stats.get(airline, {})
        ranked = sorted(
            enumerate(self.sources),
            key=lambda item: (-counts.get(item[1].name, 0), item[0]),
        )
        return [source for _, source in ranked]

    def cached(self, callsign: str) -> Optional[RouteResult]:
        """Cached route for a callsign without triggering a lookup."""

        return self._cache.get(normalize_callsign(callsign))

    def source_stats(self, airline: str | None = None) -> dict:
        """Copy of the success counts, for one airline key or all of them."""

        if airline is not None:
            return dict(self._stats.get(airline, {}))
        return {key: dict(counts) for key, counts in self._stats.items()}

    @property
    def stats(self) -> dict:
        return {
            "cache_size": len(self._cache),
            "cached_misses": sum(1 for value in self._cache.values() if value is None),
            "airlines_tracked": len(self._stats),
            "sources": [source.name for source in self.sources if source.enabled],
        }

    async def _resolve_uncached(self, key: str) -> Optional[RouteResult]:
        airline = airline_key(key)
        missed: list[str] = []

        for source in self.source_order(airline):
            if not source.enabled:
                continue
            try:
                route = await source.lookup(key)
            except Exception as exc:
                logger.warning("Route source %s failed for %s: %s", source.name, key, exc)
                route = None
            if route is None:
                missed.append(source.name)
                continue

            self._record_success(airline, source.name, missed)
            self._cache[key] = route
            logger.debug(
                "Resolved %s via %s: %s -> %s",
                key,
                source.name,
                route.origin_icao,
                route.destination_icao,
            )
            return route

        self._cache[key] = None
        logger.debug("No route found for %s", key)
        return None

    def _record_success(self, airline: str, source_name: str, missed: list[str]) -> None:
        counts = self._stats.setdefault(airline, {})
        for name in missed:
            if name in counts:
                counts[name] *= self.failure_decay
        counts[source_name] = counts.get(source_name, 0) + 1


_default_resolver: RouteResolver | None = None


def get_route_resolver() -> RouteResolver:
    """Process-wide resolver used by the API layer."""

    global _default_resolver
    if _default_resolver is None:
        _default_resolver = RouteResolver()
    return _default_resolver


__all__ = [
    "DEFAULT_AIRLINE_KEY",
    "RouteResolver",
    "airline_key",
    "get_route_resolver",
    "normalize_callsign",
]
