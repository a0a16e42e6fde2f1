"""Pydantic models mirroring the OpenWeather One Call payload."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


class WeatherCondition(BaseModel):
    """Condition text and icon code attached to a forecast entry."""

    description: str
    icon: str


class CurrentWeather(BaseModel):
    temp: float
    weather: List[WeatherCondition] = []

    @property
    def condition(self) -> Optional[WeatherCondition]:
        return self.weather[0] if self.weather else None


class HourlyWeather(BaseModel):
    """One hourly forecast record."""

    dt: int
    temp: float
    feels_like: float
    pressure: int
    humidity: int
    wind_speed: float
    wind_deg: int
    wind_gust: Optional[float] = None
    weather: List[WeatherCondition] = []


class DailyTemperature(BaseModel):
    min: float
    max: float


class FeelsLike(BaseModel):
    day: float
    night: float
    eve: float
    morn: float


class DailyWeather(BaseModel):
    """One daily forecast record."""

    dt: int
    sunrise: int
    sunset: int
    moonrise: int
    moonset: int
    moon_phase: float = Field(ge=0, le=1)
    temp: DailyTemperature
    feels_like: FeelsLike
    pressure: int
    humidity: int
    wind_speed: float
    wind_deg: int
    wind_gust: Optional[float] = None
    weather: List[WeatherCondition] = []
    pop: float = Field(ge=0, le=1)
    clouds: int
    uvi: float = Field(ge=0)
    summary: str = ""


class WeatherSnapshot(BaseModel):
    """Forecast data for a coordinate pair, as returned by the One Call API."""

    timezone_offset: int = 0
    current: CurrentWeather
    hourly: List[HourlyWeather] = []
    daily: List[DailyWeather] = []

    @field_validator("hourly", "daily")
    @classmethod
    def _chronological(cls, records):
        # sorted() is stable, so records sharing a timestamp keep their order
        return sorted(records, key=lambda record: record.dt)
