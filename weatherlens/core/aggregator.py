"""Combines geocoding, forecast and air-quality data into one weather view."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from weatherlens.config import settings
from weatherlens.core.errors import (
    AggregationError,
    AggregationErrorKind,
    FetchError,
    ResolutionError,
)
from weatherlens.core.geo_client import GeoResolver
from weatherlens.core.pollution_client import PollutionFetcher
from weatherlens.core.weather_api import WeatherFetcher
from weatherlens.models.aggregate import (
    AggregatedWeatherView,
    AirQualitySummary,
    DailyForecast,
    HourlyForecast,
)
from weatherlens.models.location import LocationCandidate
from weatherlens.models.pollution import PollutionSnapshot
from weatherlens.models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

NO_SUMMARY = "No summary available for today."


def format_clock(epoch_seconds: int, offset_seconds: int = 0) -> str:
    """Format a unix timestamp as HH:MM in the location's UTC offset."""
    tz = timezone(timedelta(seconds=offset_seconds))
    return datetime.fromtimestamp(epoch_seconds, tz).strftime("%H:%M")


def uv_level(uvi: float) -> str:
    if uvi < 3:
        return "Low"
    if uvi < 6:
        return "Moderate"
    if uvi < 8:
        return "High"
    if uvi < 11:
        return "Very High"
    return "Extreme"


class WeatherAggregator:
    """
    Resolves a place, fetches weather and air pollution concurrently and merges
    them into an AggregatedWeatherView.

    A weather failure aborts the aggregation. An air pollution failure only
    degrades the view: air quality is omitted and the view is flagged partial.
    """

    def __init__(
        self,
        geo_resolver: GeoResolver,
        weather_fetcher: WeatherFetcher,
        pollution_fetcher: PollutionFetcher,
        hourly_limit: Optional[int] = None,
        daily_limit: Optional[int] = None,
    ):
        self.geo_resolver = geo_resolver
        self.weather_fetcher = weather_fetcher
        self.pollution_fetcher = pollution_fetcher
        self.hourly_limit = (
            hourly_limit if hourly_limit is not None else settings.hourly_forecast_limit
        )
        self.daily_limit = (
            daily_limit if daily_limit is not None else settings.daily_forecast_limit
        )

    async def aggregate(self, place_name: str) -> AggregatedWeatherView:
        """Build the weather view for the best geocoding match of place_name."""
        try:
            candidates = await self.geo_resolver.resolve(place_name)
        except ResolutionError as e:
            logger.error(f"Could not resolve '{place_name}': {e}")
            raise AggregationError(
                AggregationErrorKind.FATAL, f"Failed to resolve '{place_name}': {e}"
            ) from e

        if not candidates:
            logger.warning(f"No location data found for '{place_name}'")
            raise AggregationError(
                AggregationErrorKind.NOT_FOUND,
                f"No location data found for {place_name}.",
            )

        # The upstream ranking is authoritative.
        return await self.aggregate_location(candidates[0])

    async def aggregate_location(
        self, location: LocationCandidate
    ) -> AggregatedWeatherView:
        """Build the weather view for an already chosen location."""
        weather_task = asyncio.create_task(
            self.weather_fetcher.fetch_weather(location.lat, location.lon)
        )
        pollution_task = asyncio.create_task(
            self.pollution_fetcher.fetch_pollution(location.lat, location.lon)
        )

        try:
            try:
                weather = await weather_task
            except FetchError as e:
                logger.error(f"Weather fetch failed for {location.name}: {e}")
                raise AggregationError(
                    AggregationErrorKind.FATAL,
                    f"Failed to fetch weather for {location.name}: {e}",
                ) from e

            pollution = None
            warnings = []
            try:
                pollution = await pollution_task
            except FetchError as e:
                partial = AggregationError(
                    AggregationErrorKind.PARTIAL,
                    f"Failed to fetch air pollution data: {e}",
                )
                logger.warning(f"{partial} (location: {location.name})")
                warnings.append(str(partial))
        finally:
            # Covers a weather failure and cancellation of the caller.
            for task in (weather_task, pollution_task):
                if not task.done():
                    task.cancel()
                elif not task.cancelled():
                    task.exception()  # marks an unawaited failure as retrieved

        return self.merge(location, weather, pollution, warnings)

    def merge(
        self,
        location: LocationCandidate,
        weather: WeatherSnapshot,
        pollution: Optional[PollutionSnapshot] = None,
        warnings=(),
    ) -> AggregatedWeatherView:
        """Derive display fields from the fetched snapshots."""
        offset = weather.timezone_offset
        condition = weather.current.condition
        today = weather.daily[0] if weather.daily else None

        derived = {}
        if today is not None:
            derived = dict(
                high_temperature=today.temp.max,
                low_temperature=today.temp.min,
                feels_like=today.feels_like.day,
                average_temperature=today.temp.max,
                wind_speed=today.wind_speed,
                wind_direction=today.wind_deg,
                wind_gust=today.wind_gust,
                sunrise=format_clock(today.sunrise, offset),
                sunset=format_clock(today.sunset, offset),
                uv_index=today.uvi,
                uv_level=uv_level(today.uvi),
                humidity=today.humidity,
                pressure=today.pressure,
            )

        hourly = tuple(
            HourlyForecast(
                time=datetime.fromtimestamp(hour.dt, timezone.utc),
                temp=hour.temp,
                feels_like=hour.feels_like,
                condition=hour.weather[0].description if hour.weather else "Unknown",
                icon=hour.weather[0].icon if hour.weather else "unknown",
            )
            for hour in weather.hourly[: self.hourly_limit]
        )
        daily = tuple(
            DailyForecast(
                date=datetime.fromtimestamp(day.dt, timezone.utc),
                icon=day.weather[0].icon if day.weather else "unknown",
                condition=day.weather[0].description if day.weather else "Unknown",
                min_temp=day.temp.min,
                max_temp=day.temp.max,
                precipitation_chance=day.pop * 100,
                summary=day.summary,
            )
            for day in weather.daily[: self.daily_limit]
        )

        air_quality = None
        if pollution is not None:
            components = pollution.components
            air_quality = AirQualitySummary(
                aqi=pollution.aqi,
                label=pollution.aqi_label,
                pm2_5=components.pm2_5,
                pm10=components.pm10,
                co=components.co,
                no=components.no,
                no2=components.no2,
                o3=components.o3,
                so2=components.so2,
                nh3=components.nh3,
            )

        return AggregatedWeatherView(
            location_name=location.name,
            location=location,
            fetched_at=datetime.now(timezone.utc),
            temperature=weather.current.temp,
            condition=condition.description if condition else "N/A",
            icon=condition.icon if condition else None,
            summary=today.summary if today is not None and today.summary else NO_SUMMARY,
            hourly=hourly,
            daily=daily,
            air_quality=air_quality,
            is_partial=pollution is None,
            warnings=tuple(warnings),
            **derived,
        )
