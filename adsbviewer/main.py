from __future__ import annotations

import asyncio
import contextlib
import logging
import time

from fastapi import FastAPI, Request

from adsbviewer.api import api_router
from adsbviewer.config import settings
from adsbviewer.services import get_reference_data, get_route_resolver

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("adsbviewer")

# Polled by the frontend every few seconds
QUIET_PATHS = frozenset({"/healthz"})


async def _preload_reference_data() -> None:
    store = get_reference_data()
    airports, countries = await asyncio.gather(
        store.get_airports(), store.get_country_codes()
    )
    logger.info(
        "Reference data ready: %s airports, %s countries", len(airports), len(countries)
    )


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Report route source configuration and optionally warm reference tables."""

    resolver = get_route_resolver()
    for source in resolver.sources:
        if source.enabled:
            logger.info("Route source %s enabled", source.name)
        else:
            logger.warning("Route source %s disabled (no credential or data file)", source.name)

    app.state.reference_task = None
    if settings.preload_reference_data:
        app.state.reference_task = asyncio.create_task(_preload_reference_data())

    try:
        yield
    finally:
        task = app.state.reference_task
        if task and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        logger.info("Route cache at shutdown: %s", resolver.stats)


app = FastAPI(title="ADSB Viewer Backend", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
    location = request.query_params.get("location")
    logger.log(
        level,
        "%s %s%s -> %s in %.1f ms",
        request.method,
        request.url.path,
        f" [location={location}]" if location else "",
        response.status_code,
        elapsed_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    return {"message": "ADSB viewer backend is running"}
