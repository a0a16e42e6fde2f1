"""Keeps the latest weather view for the selected location."""

import asyncio
import logging
from typing import Optional, Union

from weatherlens.config import settings
from weatherlens.core.aggregator import WeatherAggregator
from weatherlens.core.errors import AggregationError
from weatherlens.models.aggregate import AggregatedWeatherView
from weatherlens.models.location import LocationCandidate

logger = logging.getLogger(__name__)


class ForecastLoader:
    """
    Runs one aggregation at a time for the selected place.

    Selecting a new place cancels the outstanding aggregation, so the last
    request wins regardless of completion order. The current view is replaced,
    never mutated.
    """

    def __init__(self, aggregator: WeatherAggregator):
        self.aggregator = aggregator
        self.view: Optional[AggregatedWeatherView] = None
        self.error: Optional[AggregationError] = None
        self._target: Union[str, LocationCandidate, None] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_loading(self) -> bool:
        return self._task is not None and not self._task.done()

    async def load(self, place_name: Optional[str] = None) -> Optional[AggregatedWeatherView]:
        """Fetch the view for a place name (the configured default city if omitted)."""
        return await self._run(place_name or settings.default_city)

    async def load_location(
        self, location: LocationCandidate
    ) -> Optional[AggregatedWeatherView]:
        """Fetch the view for a chosen search result or favorite."""
        return await self._run(location)

    async def refresh(self) -> Optional[AggregatedWeatherView]:
        """Re-run the last request."""
        if self._target is None:
            return await self.load()
        return await self._run(self._target)

    async def close(self):
        if self.is_loading:
            self._task.cancel()
            await asyncio.wait([self._task])
        self._task = None

    async def _run(
        self, target: Union[str, LocationCandidate]
    ) -> Optional[AggregatedWeatherView]:
        """
        Aggregate target and publish the outcome.

        Returns None when a newer request superseded this one.
        """
        if self.is_loading:
            logger.info("Cancelling superseded weather request")
            self._task.cancel()

        self._target = target
        if isinstance(target, LocationCandidate):
            coro = self.aggregator.aggregate_location(target)
        else:
            coro = self.aggregator.aggregate(target)
        task = asyncio.create_task(coro)
        self._task = task

        try:
            view = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                # The caller itself was cancelled, not just the aggregation.
                raise
            return None
        except AggregationError as e:
            if task is not self._task:
                return None
            self.error = e
            raise

        if task is not self._task:
            return None
        self.view = view
        self.error = None
        return view
