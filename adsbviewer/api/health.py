"""Health check endpoint."""

from fastapi import APIRouter

from adsbviewer.config import settings
from adsbviewer.services import get_route_resolver

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check() -> dict:
    """Simple health check endpoint with route cache counters."""
    return {"status": "ok", "env": settings.env, "routes": get_route_resolver().stats}
