"""Shared fixtures: canned OpenWeather payloads and a fake transport."""

import httpx
import pytest

from weatherlens.core.geo_client import GeoResolver
from weatherlens.core.pollution_client import PollutionFetcher
from weatherlens.core.weather_api import WeatherFetcher
from weatherlens.core.aggregator import WeatherAggregator
from weatherlens.core.storage import InMemoryKeyValueStore

GEO_URL = "https://geo.test/direct"
ONECALL_URL = "https://weather.test/onecall"
POLLUTION_URL = "https://weather.test/air_pollution"

DAY = 86400


def make_hourly(count, start=1735725600):
    return [
        {
            "dt": start + i * 3600,
            "temp": 10.0 + i,
            "feels_like": 9.0 + i,
            "pressure": 1012,
            "humidity": 70,
            "wind_speed": 3.5,
            "wind_deg": 200,
            "wind_gust": 6.1,
            "weather": [{"description": "light rain", "icon": "10d"}],
        }
        for i in range(count)
    ]


def make_daily(count, start=1735725600):
    return [
        {
            "dt": start + i * DAY,
            # 07:45 and 16:10 UTC on the first day
            "sunrise": 1735717500 + i * DAY,
            "sunset": 1735747800 + i * DAY,
            "moonrise": 1735720000 + i * DAY,
            "moonset": 1735750000 + i * DAY,
            "moon_phase": 0.25,
            "temp": {"min": 4.2 + i, "max": 11.8 + i},
            "feels_like": {"day": 9.5, "night": 2.1, "eve": 6.0, "morn": 1.5},
            "pressure": 1015,
            "humidity": 81,
            "wind_speed": 5.4,
            "wind_deg": 250,
            "wind_gust": 11.2,
            "weather": [{"description": "overcast clouds", "icon": "04d"}],
            "pop": 0.35,
            "clouds": 90,
            "uvi": 1.3,
            "summary": "Expect a day of partly cloudy with rain",
        }
        for i in range(count)
    ]


def make_weather(hourly=48, daily=8, timezone_offset=0):
    return {
        "lat": 48.8589,
        "lon": 2.32,
        "timezone": "Europe/Paris",
        "timezone_offset": timezone_offset,
        "current": {
            "dt": 1735725600,
            "temp": 9.6,
            "weather": [{"description": "broken clouds", "icon": "04d"}],
        },
        "hourly": make_hourly(hourly),
        "daily": make_daily(daily),
    }


def make_pollution(entries=1):
    return {
        "coord": {"lon": 2.32, "lat": 48.8589},
        "list": [
            {
                "dt": 1735725600 + i * 3600,
                "main": {"aqi": 2},
                "components": {
                    "co": 230.31,
                    "no": 0.12,
                    "no2": 12.3,
                    "o3": 55.1,
                    "so2": 1.8,
                    "pm2_5": 6.4,
                    "pm10": 9.9,
                    "nh3": 0.5,
                },
            }
            for i in range(entries)
        ],
    }


PARIS = {
    "name": "Paris",
    "local_names": {"fr": "Paris", "ja": "パリ"},
    "lat": 48.8588897,
    "lon": 2.3200410,
    "country": "FR",
    "state": "Ile-de-France",
}
PARIS_TX = {
    "name": "Paris",
    "lat": 33.6617962,
    "lon": -95.555513,
    "country": "US",
    "state": "Texas",
}


class FakeOpenWeather:
    """
    httpx.MockTransport handler serving the three endpoints.

    Each attribute holds either a JSON-serializable payload, an httpx.Response,
    or an exception instance to raise.
    """

    def __init__(self):
        self.geo = [PARIS, PARIS_TX]
        self.weather = make_weather()
        self.pollution = make_pollution()
        self.requests = []

    def _reply(self, outcome, request):
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(200, json=outcome)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # Route on the last path segment so configured and test URLs both work.
        endpoint = request.url.path.rsplit("/", 1)[-1]
        if endpoint == "direct":
            return self._reply(self.geo, request)
        if endpoint == "onecall":
            return self._reply(self.weather, request)
        if endpoint == "air_pollution":
            return self._reply(self.pollution, request)
        return httpx.Response(404, json={"cod": 404, "message": "not found"})

    def paths(self):
        return [request.url.path for request in self.requests]


@pytest.fixture
def upstream():
    return FakeOpenWeather()


@pytest.fixture
def http_client(upstream):
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def geo_resolver(http_client):
    return GeoResolver(api_key="test-key", http_client=http_client, base_url=GEO_URL)


@pytest.fixture
def weather_fetcher(http_client):
    return WeatherFetcher(
        api_key="test-key", http_client=http_client, base_url=ONECALL_URL
    )


@pytest.fixture
def pollution_fetcher(http_client):
    return PollutionFetcher(
        api_key="test-key", http_client=http_client, base_url=POLLUTION_URL
    )


@pytest.fixture
def aggregator(geo_resolver, weather_fetcher, pollution_fetcher):
    return WeatherAggregator(geo_resolver, weather_fetcher, pollution_fetcher)


@pytest.fixture
def storage():
    return InMemoryKeyValueStore()
