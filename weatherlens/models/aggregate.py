"""Display-ready weather view built once per fetch."""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from weatherlens.models.location import LocationCandidate


class HourlyForecast(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: datetime
    temp: float
    feels_like: float
    condition: str
    icon: str


class DailyForecast(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime
    icon: str
    condition: str
    min_temp: float
    max_temp: float
    precipitation_chance: float  # percent
    summary: str


class AirQualitySummary(BaseModel):
    """Current air quality at the location."""

    model_config = ConfigDict(frozen=True)

    aqi: int
    label: str
    pm2_5: float
    pm10: float
    co: float
    no: float
    no2: float
    o3: float
    so2: float
    nh3: float


class AggregatedWeatherView(BaseModel):
    """
    Everything the presentation layer needs for one location.

    Fields derived from today's forecast are None when the upstream sent no
    daily records. air_quality is None when the pollution fetch failed, in
    which case is_partial is set and warnings explain why.
    """

    model_config = ConfigDict(frozen=True)

    location_name: str
    location: LocationCandidate
    fetched_at: datetime

    temperature: float
    condition: str
    icon: Optional[str] = None

    high_temperature: Optional[float] = None
    low_temperature: Optional[float] = None
    feels_like: Optional[float] = None
    # Today's maximum; the original app never computed a real mean.
    average_temperature: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_direction: Optional[int] = None
    wind_gust: Optional[float] = None
    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    uv_index: Optional[float] = None
    uv_level: Optional[str] = None
    humidity: Optional[int] = None
    pressure: Optional[int] = None
    summary: str

    hourly: Tuple[HourlyForecast, ...] = ()
    daily: Tuple[DailyForecast, ...] = ()

    air_quality: Optional[AirQualitySummary] = None
    is_partial: bool = False
    warnings: Tuple[str, ...] = ()

    @property
    def air_quality_available(self) -> bool:
        return self.air_quality is not None
