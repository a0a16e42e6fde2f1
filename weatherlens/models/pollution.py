"""Pydantic models for the OpenWeather Air Pollution payload."""

from pydantic import BaseModel, Field
from typing import List

AQI_LABELS = {
    1: "Good",
    2: "Fair",
    3: "Moderate",
    4: "Poor",
    5: "Very Poor",
}


class AirComponents(BaseModel):
    """Pollutant concentrations in μg/m³."""

    co: float = Field(ge=0)
    no: float = Field(ge=0)
    no2: float = Field(ge=0)
    o3: float = Field(ge=0)
    so2: float = Field(ge=0)
    pm2_5: float = Field(ge=0)
    pm10: float = Field(ge=0)
    nh3: float = Field(ge=0)


class AirQualityIndex(BaseModel):
    aqi: int = Field(ge=1, le=5)


class PollutionSnapshot(BaseModel):
    """A single air pollution reading."""

    dt: int
    main: AirQualityIndex
    components: AirComponents

    @property
    def aqi(self) -> int:
        return self.main.aqi

    @property
    def aqi_label(self) -> str:
        return AQI_LABELS[self.main.aqi]


class AirPollutionResponse(BaseModel):
    """Envelope returned by the endpoint; the first entry is the current reading."""

    list: List[PollutionSnapshot]
