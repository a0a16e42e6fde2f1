"""Error taxonomy shared by the search, fetch and aggregation layers."""

from enum import Enum
from typing import Optional


class WeatherLensError(Exception):
    """Base class for every error raised by weatherlens."""

    #: Whether re-submitting the same request can succeed.
    recoverable: bool = True


class ValidationKind(str, Enum):
    EMPTY = "empty"
    INVALID_CHARACTERS = "invalid_characters"


class SearchValidationError(WeatherLensError):
    """Raised locally when search text is rejected before any network call."""

    recoverable = False

    _MESSAGES = {
        ValidationKind.EMPTY: "Please enter a city name",
        ValidationKind.INVALID_CHARACTERS: "Search contains invalid characters",
    }
    _SUGGESTIONS = {
        ValidationKind.EMPTY: "Type the name of a city to search for.",
        ValidationKind.INVALID_CHARACTERS: "Use only letters and spaces.",
    }

    def __init__(self, kind: ValidationKind):
        self.kind = kind
        super().__init__(self._MESSAGES[kind])

    @property
    def recovery_suggestion(self) -> str:
        return self._SUGGESTIONS[self.kind]


class UpstreamErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    UPSTREAM = "upstream"
    NETWORK = "network"
    DECODE = "decode"


class UpstreamError(WeatherLensError):
    """Failure talking to one of the OpenWeather endpoints."""

    def __init__(
        self,
        kind: UpstreamErrorKind,
        message: str,
        status_code: Optional[int] = None,
    ):
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)


class ResolutionError(UpstreamError):
    """Geocoding a place name failed."""


class FetchError(UpstreamError):
    """Fetching weather or air pollution for a coordinate pair failed."""


class AggregationErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PARTIAL = "partial"
    FATAL = "fatal"


class AggregationError(WeatherLensError):
    """
    Failure of the aggregation pipeline.

    NOT_FOUND and FATAL are raised. PARTIAL is never raised: it is recorded
    on the returned view as a warning when air quality could not be fetched.
    """

    def __init__(self, kind: AggregationErrorKind, message: str):
        self.kind = kind
        super().__init__(message)
