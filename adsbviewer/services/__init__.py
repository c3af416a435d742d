"""Service-layer helpers for the ADSB viewer backend."""

from .enricher import AircraftEnricher, enrich
from .formatter import format_aircraft
from .geo import bearing, direction, distance
from .reference_data import ReferenceDataStore, get_reference_data
from .route_resolver import RouteResolver, airline_key, get_route_resolver
from .route_sources import (
    AdsbdbRouteSource,
    AeroDataBoxRouteSource,
    AviationStackRouteSource,
    RouteSource,
    StaticRoutesSource,
    default_route_sources,
)
from .snapshot import SnapshotBuilder, build_snapshot, get_snapshot_builder

__all__ = [
    "AdsbdbRouteSource",
    "AeroDataBoxRouteSource",
    "AircraftEnricher",
    "AviationStackRouteSource",
    "ReferenceDataStore",
    "RouteResolver",
    "RouteSource",
    "SnapshotBuilder",
    "StaticRoutesSource",
    "airline_key",
    "bearing",
    "build_snapshot",
    "default_route_sources",
    "direction",
    "distance",
    "enrich",
    "format_aircraft",
    "get_reference_data",
    "get_route_resolver",
    "get_snapshot_builder",
]
