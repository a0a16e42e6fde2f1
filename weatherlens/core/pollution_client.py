"""Client for the OpenWeather Air Pollution API."""

import logging

from pydantic import ValidationError

from weatherlens.config import settings
from weatherlens.core.errors import FetchError, UpstreamErrorKind
from weatherlens.core.http_client import OpenWeatherClient
from weatherlens.core.weather_api import check_coordinates
from weatherlens.models.pollution import AirPollutionResponse, PollutionSnapshot

logger = logging.getLogger(__name__)


class PollutionFetcher(OpenWeatherClient):
    """Fetches the current air quality reading for a coordinate pair."""

    error_class = FetchError

    def __init__(self, *args, base_url: str = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.base_url = base_url or settings.openweather_air_pollution_url

    async def fetch_pollution(self, lat: float, lon: float) -> PollutionSnapshot:
        """
        Return the first (current) entry of the upstream list.

        An empty list is a decode failure, not a clean-air reading.
        """
        check_coordinates(lat, lon)

        logger.info(f"Fetching air pollution for ({lat}, {lon})")
        data = await self._get_json(self.base_url, {"lat": lat, "lon": lon})

        try:
            response = AirPollutionResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Malformed air pollution response: {e}")
            raise FetchError(
                UpstreamErrorKind.DECODE, f"Failed to parse air pollution: {e}"
            ) from e

        if not response.list:
            logger.error(f"Air pollution response for ({lat}, {lon}) has no entries")
            raise FetchError(
                UpstreamErrorKind.DECODE, "Air pollution response contained no entries"
            )

        reading = response.list[0]
        logger.info(f"Air quality index: {reading.aqi} ({reading.aqi_label})")
        return reading
