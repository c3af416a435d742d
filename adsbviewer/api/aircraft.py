"""Aircraft snapshot endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from adsbviewer.domain.locations import DEFAULT_LOCATION_KEY
from adsbviewer.models import AircraftSnapshot
from adsbviewer.services import get_snapshot_builder

router = APIRouter(prefix="/api", tags=["aircraft"])

logger = logging.getLogger("adsbviewer.api.aircraft")


@router.get(
    "/aircraft",
    response_model=AircraftSnapshot,
    summary="Aircraft near an observation location, with routes",
)
async def get_aircraft(
    location: str = Query(
        default=DEFAULT_LOCATION_KEY, description="Observation location key (1, 2 or 3)"
    ),
) -> AircraftSnapshot:
    """Return enriched aircraft for the selected observation location."""

    try:
        return await get_snapshot_builder().build_snapshot(location)
    except Exception as exc:
        logger.exception("Error in /api/aircraft")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from exc
