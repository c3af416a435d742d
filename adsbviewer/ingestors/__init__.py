"""Outbound data ingestors for the ADSB viewer."""

from .feed import FeedIngestor
from .metar import MetarIngestor

__all__ = ["FeedIngestor", "MetarIngestor"]
