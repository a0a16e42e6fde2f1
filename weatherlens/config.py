"""Application configuration management using Pydantic's BaseSettings."""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Defines all configuration settings for the client, loaded from .env file."""

    # API Keys
    openweather_api_key: Optional[str] = None

    # App settings
    debug: bool = False
    log_level: str = "INFO"

    # OpenWeather endpoints
    openweather_geo_url: str = "https://api.openweathermap.org/geo/1.0/direct"
    openweather_onecall_url: str = "https://api.openweathermap.org/data/3.0/onecall"
    openweather_air_pollution_url: str = (
        "https://api.openweathermap.org/data/2.5/air_pollution"
    )
    units: str = "metric"
    request_timeout_seconds: float = 10.0

    # Search behaviour
    geo_result_limit: int = 5
    search_debounce_seconds: float = 0.5
    recent_searches_limit: int = 5

    # Forecast slices
    hourly_forecast_limit: int = 8
    daily_forecast_limit: int = 10

    default_city: str = "London"

    # Persisted favorites and recent searches
    storage_path: str = "weatherlens_state.json"

    class Config:
        """Pydantic model configuration."""

        env_file = ".env"
        env_prefix = "WEATHERLENS_"


settings = Settings()
