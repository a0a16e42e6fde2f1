"""Shared HTTP plumbing for the OpenWeather endpoints."""

import logging
from typing import Any, Dict, Optional, Type

import httpx

from weatherlens.config import settings
from weatherlens.core.errors import UpstreamError, UpstreamErrorKind

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """
    Base class for the geocoding, One Call and air pollution clients.

    Translates transport failures, non-success statuses and undecodable bodies
    into the subclass's error type. An httpx.AsyncClient can be shared between
    clients; otherwise one is created lazily and owned by this instance.
    """

    error_class: Type[UpstreamError] = UpstreamError

    def __init__(
        self,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openweather_api_key
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _error(
        self, kind: UpstreamErrorKind, message: str, status_code: Optional[int] = None
    ) -> UpstreamError:
        return self.error_class(kind, message, status_code=status_code)

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        """GET url with the API key appended and return the decoded JSON body."""
        query = dict(params, appid=self.api_key)
        logger.debug(f"GET {url} params={params}")

        try:
            response = await self.client.get(url, params=query, timeout=self.timeout)
        except httpx.TimeoutException as e:
            logger.error(f"Request to {url} timed out after {self.timeout}s")
            raise self._error(
                UpstreamErrorKind.NETWORK, f"Request timed out: {e}"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Network error during request to {url}: {e}")
            raise self._error(UpstreamErrorKind.NETWORK, f"Network error: {e}") from e

        if response.status_code != 200:
            message = self._describe_error_response(response)
            logger.error(f"Request to {url} failed: {message}")
            raise self._error(
                UpstreamErrorKind.UPSTREAM, message, status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Non-JSON response from {url}: {response.text[:200]}")
            raise self._error(
                UpstreamErrorKind.DECODE, f"Failed to parse response: {e}"
            ) from e

    @staticmethod
    def _describe_error_response(response: httpx.Response) -> str:
        """Build a readable message from an OpenWeather error body."""
        try:
            error_data = response.json()
            cod = error_data.get("cod", response.status_code)
            message = error_data.get("message", "Unknown error")
            return f"OpenWeather API error {cod}: {message}"
        except (ValueError, AttributeError):
            return f"HTTP {response.status_code}: {response.text[:200]}"
