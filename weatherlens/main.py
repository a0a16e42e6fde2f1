"""Wires the weatherlens services together for a host application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx

from weatherlens.config import settings
from weatherlens.core.aggregator import WeatherAggregator
from weatherlens.core.favorites_store import FavoritesStore
from weatherlens.core.forecast_loader import ForecastLoader
from weatherlens.core.geo_client import GeoResolver
from weatherlens.core.pollution_client import PollutionFetcher
from weatherlens.core.recent_searches import RecentSearches
from weatherlens.core.search_controller import SearchController
from weatherlens.core.storage import JsonFileKeyValueStore, KeyValueStore
from weatherlens.core.weather_api import WeatherFetcher

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s - %(message)s",
    )


class Services:
    """The object graph a presentation layer talks to."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        storage: KeyValueStore,
        api_key: Optional[str] = None,
    ):
        self.http_client = http_client
        self.storage = storage

        self.geo_resolver = GeoResolver(api_key=api_key, http_client=http_client)
        self.weather_fetcher = WeatherFetcher(api_key=api_key, http_client=http_client)
        self.pollution_fetcher = PollutionFetcher(
            api_key=api_key, http_client=http_client
        )
        self.aggregator = WeatherAggregator(
            self.geo_resolver, self.weather_fetcher, self.pollution_fetcher
        )
        self.forecast = ForecastLoader(self.aggregator)
        self.favorites = FavoritesStore(storage)
        self.recent_searches = RecentSearches(storage)
        self.search = SearchController(self.geo_resolver, self.recent_searches)

    async def close(self):
        await self.search.close()
        await self.forecast.close()


@asynccontextmanager
async def open_services(
    storage: Optional[KeyValueStore] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    api_key: Optional[str] = None,
):
    """Create the services, and tear down pending work and the HTTP client on exit."""
    logger.info("Starting weatherlens services")
    if not (api_key or settings.openweather_api_key):
        logger.warning("No OpenWeather API key configured; requests will be rejected")

    owns_client = http_client is None
    if owns_client:
        http_client = httpx.AsyncClient(timeout=settings.request_timeout_seconds)
    services = Services(
        http_client,
        storage or JsonFileKeyValueStore(settings.storage_path),
        api_key=api_key,
    )
    try:
        yield services
    finally:
        logger.info("Shutting down weatherlens services")
        await services.close()
        if owns_client:
            await http_client.aclose()
