"""Configuration settings for the ADSB viewer backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("adsbviewer.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_float(env_var: str, default: float) -> float:
    """Parse an environment variable into a float with a default."""

    value = os.getenv(env_var)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", env_var, value)
        return default


@lru_cache(maxsize=None)
def get_ssm_secret(name: str) -> str | None:
    """Fetch a decrypted parameter from AWS SSM Parameter Store.

    Only consulted when ``ADSBVIEWER_SSM_PREFIX`` is set. Failures are logged and
    yield ``None`` so the dependent route source is simply disabled.
    """

    region = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1"
    try:
        client = boto3.client("ssm", region_name=region)
        response = client.get_parameter(Name=name, WithDecryption=True)
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:
        logger.warning("Failed to load %s from SSM: %s", name, exc)
        return None

    return value or None


def _get_secret(env_var: str, ssm_name: str) -> str | None:
    value = os.getenv(env_var)
    if value:
        return value

    prefix = os.getenv("ADSBVIEWER_SSM_PREFIX")
    if not prefix:
        return None
    return get_ssm_secret(f"{prefix.rstrip('/')}/{ssm_name}")


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    env: str = os.getenv("ADSBVIEWER_ENV", "local")
    log_level: str = os.getenv("ADSBVIEWER_LOG_LEVEL", "INFO")

    # Observer position used for bearing / direction / distance
    observer_lat: float = _get_float("OBSERVER_LAT", 43.687737)
    observer_lon: float = _get_float("OBSERVER_LON", -65.128691)

    # Live traffic feed
    feed_url_template: str = os.getenv(
        "FEED_URL_TEMPLATE",
        "https://api.adsb.lol/v2/lat/{lat}/lon/{lon}/dist/{radius}",
    )
    feed_radius_km: float = _get_float("FEED_RADIUS_KM", 100.0)
    feed_timeout: float = _get_float("FEED_TIMEOUT", 15.0)

    # Route sources
    adsbdb_base_url: str = os.getenv(
        "ADSBDB_BASE_URL", "https://api.adsbdb.com/v0/callsign/"
    )
    adsbdb_timeout: float = _get_float("ADSBDB_TIMEOUT", 8.0)

    aerodatabox_base_url: str = os.getenv(
        "AERODATABOX_BASE_URL", "https://aerodatabox.p.rapidapi.com/flights/number/"
    )
    aerodatabox_host: str = os.getenv("AERODATABOX_HOST", "aerodatabox.p.rapidapi.com")
    aerodatabox_api_key: str | None = _get_secret("AERODATABOX_API_KEY", "aerodatabox_api_key")
    aerodatabox_timeout: float = _get_float("AERODATABOX_TIMEOUT", 10.0)

    aviationstack_base_url: str = os.getenv(
        "AVIATIONSTACK_BASE_URL", "https://api.aviationstack.com/v1/flights"
    )
    aviationstack_api_key: str | None = _get_secret(
        "AVIATION_STACK_API_KEY", "aviationstack_api_key"
    )
    aviationstack_timeout: float = _get_float("AVIATIONSTACK_TIMEOUT", 8.0)

    static_routes_csv_path: str = os.getenv(
        "STATIC_ROUTES_CSV_PATH", "opensky_route_data.csv"
    )

    # Preference multiplier applied to sources that missed before another one answered
    route_stats_failure_decay: float = _get_float("ROUTE_STATS_FAILURE_DECAY", 0.5)

    # Reference data
    airports_url: str = os.getenv(
        "AIRPORTS_URL",
        "https://raw.githubusercontent.com/jpatokal/openflights/master/data/airports.dat",
    )
    airports_timeout: float = _get_float("AIRPORTS_TIMEOUT", 20.0)
    countries_url: str = os.getenv(
        "COUNTRIES_URL", "https://ourairports.com/data/countries.csv"
    )
    countries_timeout: float = _get_float("COUNTRIES_TIMEOUT", 15.0)
    # Download both tables at startup instead of on the first enriched route
    preload_reference_data: bool = _get_bool("PRELOAD_REFERENCE_DATA", False)

    # Cloud ceiling
    metar_url: str = os.getenv(
        "METAR_URL", "https://aviationweather.gov/api/data/metar"
    )
    metar_station: str = os.getenv("METAR_STATION", "CYQI")
    metar_timeout: float = _get_float("METAR_TIMEOUT", 10.0)


settings = Settings()

__all__ = ["settings", "Settings", "get_ssm_secret"]
