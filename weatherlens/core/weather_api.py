"""Clients for fetching forecast and air-quality data for a coordinate pair."""

import logging

from pydantic import ValidationError

from weatherlens.config import settings
from weatherlens.core.errors import FetchError, UpstreamErrorKind
from weatherlens.core.http_client import OpenWeatherClient
from weatherlens.models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)


def check_coordinates(lat: float, lon: float):
    """Raise FetchError(BAD_REQUEST) for coordinates outside the valid ranges."""
    if not -90 <= lat <= 90 or not -180 <= lon <= 180:
        raise FetchError(
            UpstreamErrorKind.BAD_REQUEST,
            f"Invalid coordinates: lat={lat}, lon={lon}",
        )


class WeatherFetcher(OpenWeatherClient):
    """Fetches current, hourly and daily forecasts from the One Call API."""

    error_class = FetchError

    def __init__(self, *args, base_url: str = None, units: str = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.base_url = base_url or settings.openweather_onecall_url
        self.units = units or settings.units

    async def fetch_weather(self, lat: float, lon: float) -> WeatherSnapshot:
        check_coordinates(lat, lon)

        logger.info(f"Fetching weather for ({lat}, {lon})")
        data = await self._get_json(
            self.base_url, {"lat": lat, "lon": lon, "units": self.units}
        )

        try:
            snapshot = WeatherSnapshot.model_validate(data)
        except ValidationError as e:
            logger.error(f"Malformed weather response for ({lat}, {lon}): {e}")
            raise FetchError(
                UpstreamErrorKind.DECODE, f"Failed to parse weather: {e}"
            ) from e

        logger.info(
            f"Weather fetched: {snapshot.current.temp}°, "
            f"{len(snapshot.hourly)} hourly / {len(snapshot.daily)} daily records"
        )
        return snapshot
