"""
check_weather.py
Fetches the aggregated weather view for a city against the live OpenWeather
APIs and optionally toggles it as a favorite.
Run:
    WEATHERLENS_OPENWEATHER_API_KEY=... python scripts/check_weather.py
"""

import asyncio
import logging

from weatherlens.core.errors import AggregationError
from weatherlens.main import configure_logging, open_services

# ------------------ PARAMETERS ------------------
CITY = "Paris"  # e.g., "Paris"
TOGGLE_FAVORITE = False  # True = toggle CITY in favorites
# ------------------------------------------------

configure_logging()


async def _main():
    async with open_services() as services:
        try:
            view = await services.forecast.load(CITY)
        except AggregationError as e:
            logging.error(f"{e.kind.value}: {e}")
            return

        print(f"{view.location_name}: {view.temperature}° {view.condition}")
        print(
            f"High {view.high_temperature}° / Low {view.low_temperature}°, "
            f"feels like {view.feels_like}°"
        )
        print(f"Sunrise {view.sunrise}, sunset {view.sunset}, UV {view.uv_index} ({view.uv_level})")
        for hour in view.hourly:
            print(f"  {hour.time:%H:%M} {hour.temp:5.1f}° {hour.condition}")
        for day in view.daily:
            print(
                f"  {day.date:%a %d} {day.min_temp:5.1f}° - {day.max_temp:5.1f}° "
                f"rain {day.precipitation_chance:.0f}%"
            )
        if view.air_quality_available:
            aq = view.air_quality
            print(f"Air quality: {aq.aqi} ({aq.label}), PM2.5 {aq.pm2_5}, PM10 {aq.pm10}")
        else:
            print("Air quality unavailable")

        if TOGGLE_FAVORITE:
            is_favorite = await services.favorites.toggle(view.location)
            logging.info(f"{view.location_name} favorite: {is_favorite}")


if __name__ == "__main__":
    asyncio.run(_main())
