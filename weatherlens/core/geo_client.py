"""Client for resolving place names through the OpenWeather geocoding API."""

import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from weatherlens.config import settings
from weatherlens.core.errors import ResolutionError, UpstreamErrorKind
from weatherlens.core.http_client import OpenWeatherClient
from weatherlens.models.location import LocationCandidate

logger = logging.getLogger(__name__)

_candidates_adapter = TypeAdapter(List[LocationCandidate])


class GeoResolver(OpenWeatherClient):
    """Turns free-text place names into ranked location candidates."""

    error_class = ResolutionError

    def __init__(self, *args, base_url: str = None, limit: int = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.base_url = base_url or settings.openweather_geo_url
        self.limit = limit if limit is not None else settings.geo_result_limit

    async def resolve(self, query: str) -> List[LocationCandidate]:
        """
        Return up to `limit` candidates in the order the upstream ranked them.

        An empty list means the query was understood but matched nothing.
        """
        city = query.strip() if query else ""
        if not city:
            raise ResolutionError(UpstreamErrorKind.BAD_REQUEST, "Query is empty")

        logger.info(f"Resolving location for '{city}'")
        data = await self._get_json(
            self.base_url, {"q": city, "limit": self.limit}
        )

        try:
            candidates = _candidates_adapter.validate_python(data)
        except ValidationError as e:
            logger.error(f"Malformed geocoding response for '{city}': {e}")
            raise ResolutionError(
                UpstreamErrorKind.DECODE, f"Failed to parse locations: {e}"
            ) from e

        logger.info(f"Found {len(candidates)} location(s) for '{city}'")
        return candidates[: self.limit]
