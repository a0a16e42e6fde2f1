"""Models describing the state of the search box."""

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from weatherlens.core.errors import WeatherLensError
from weatherlens.models.location import LocationCandidate


class SearchState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    DEBOUNCING = "debouncing"
    IN_FLIGHT = "in_flight"
    RESOLVED = "resolved"
    FAILED = "failed"


class SearchSession(BaseModel):
    """Snapshot of the search controller handed to listeners."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    state: SearchState = SearchState.IDLE
    query: str = ""
    validation_error: Optional[WeatherLensError] = None
    error: Optional[WeatherLensError] = None
    in_flight: bool = False
    last_search_at: Optional[datetime] = None
    results: Tuple[LocationCandidate, ...] = ()
    recent_searches: Tuple[str, ...] = ()

    @property
    def error_message(self) -> Optional[str]:
        err = self.validation_error or self.error
        return str(err) if err else None
