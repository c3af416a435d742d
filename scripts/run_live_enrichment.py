#!/usr/bin/env python
"""
Run this to exercise the live feed, route sources, and reference data end to end.

Usage (from repo root):
    python scripts/run_live_enrichment.py [location_key]
"""

import asyncio
import sys

from adsbviewer.services import build_snapshot, get_route_resolver


async def main(location_key: str) -> None:
    print(f"=== Live snapshot for location {location_key} ===\n")

    snapshot = await build_snapshot(location_key)
    print(f"{snapshot.location}: {len(snapshot.aircraft)} aircraft, ceiling={snapshot.cloud_ceiling_ft}")

    if not snapshot.aircraft:
        print("\nNo aircraft returned.")
        return

    for idx, ac in enumerate(snapshot.aircraft[:10], start=1):
        print(
            f"{idx}. callsign={ac.callsign!r}, airline={ac.airline!r}, "
            f"alt_ft={ac.altitude_ft}, look={ac.look_direction} {ac.bearing_deg}deg, "
            f"dist_km={ac.distance_km}, route={ac.origin_display} -> {ac.destination_display}"
        )

    resolver = get_route_resolver()
    print("\nResolver stats:", resolver.stats)
    print("Source counts:", resolver.source_stats())


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "2"))
