"""Debounced, validated city search with recent-query history."""

import asyncio
import logging
import unicodedata
from datetime import datetime, timezone
from typing import Callable, List, Optional

from weatherlens.config import settings
from weatherlens.core.errors import (
    ResolutionError,
    SearchValidationError,
    ValidationKind,
    WeatherLensError,
)
from weatherlens.core.geo_client import GeoResolver
from weatherlens.core.recent_searches import RecentSearches
from weatherlens.models.location import LocationCandidate
from weatherlens.models.search import SearchSession, SearchState

logger = logging.getLogger(__name__)


def validate_query(text: str) -> str:
    """
    Return the trimmed query, or raise SearchValidationError.

    Only letters (including combining marks) and horizontal spaces are
    accepted, so digits, punctuation, tabs and line breaks inside the query are
    rejected even though some real place names contain punctuation.
    """
    query = text.strip()
    if not query:
        raise SearchValidationError(ValidationKind.EMPTY)
    for char in query:
        if unicodedata.category(char) == "Zs":
            continue
        if unicodedata.category(char)[0] not in ("L", "M"):
            raise SearchValidationError(ValidationKind.INVALID_CHARACTERS)
    return query


class SearchController:
    """
    State machine in front of GeoResolver.

    Every keystroke bumps a generation counter. A debounce task or an
    in-flight request only applies its outcome if its generation is still
    current, and superseded tasks are cancelled, so results are never applied
    out of order.

    Methods that schedule work must be called from a running event loop.
    """

    def __init__(
        self,
        resolver: GeoResolver,
        recent_searches: RecentSearches,
        debounce_seconds: Optional[float] = None,
        on_update: Optional[Callable[[SearchSession], None]] = None,
    ):
        self.resolver = resolver
        self.recent_searches = recent_searches
        self.debounce_seconds = (
            debounce_seconds
            if debounce_seconds is not None
            else settings.search_debounce_seconds
        )
        self.on_update = on_update

        self._generation = 0
        self._debounce_task: Optional[asyncio.Task] = None
        self._search_task: Optional[asyncio.Task] = None

        self._state = SearchState.IDLE
        self._query = ""
        self._validation_error: Optional[SearchValidationError] = None
        self._error: Optional[WeatherLensError] = None
        self._results: List[LocationCandidate] = []
        self._last_search_at: Optional[datetime] = None

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def session(self) -> SearchSession:
        return SearchSession(
            state=self._state,
            query=self._query,
            validation_error=self._validation_error,
            error=self._error,
            in_flight=self._state == SearchState.IN_FLIGHT,
            last_search_at=self._last_search_at,
            results=tuple(self._results),
            recent_searches=tuple(self.recent_searches.items),
        )

    def _set_state(self, state: SearchState):
        self._state = state
        if self.on_update is not None:
            self.on_update(self.session)

    def _cancel_pending(self):
        for task in (self._debounce_task, self._search_task):
            if task is not None and not task.done():
                task.cancel()
        self._debounce_task = None
        self._search_task = None

    def _validate(self, text: str) -> Optional[str]:
        """Validate text, moving to FAILED on rejection."""
        self._query = text
        self._generation += 1
        self._cancel_pending()
        self._error = None
        self._set_state(SearchState.VALIDATING)

        try:
            query = validate_query(text)
        except SearchValidationError as e:
            logger.debug(f"Rejected search text {text!r}: {e.kind.value}")
            self._validation_error = e
            self._results = []
            self._set_state(SearchState.FAILED)
            return None

        self._validation_error = None
        return query

    def on_text_changed(self, text: str):
        """Handle a keystroke: validate, then (re)start the debounce timer."""
        query = self._validate(text)
        if query is None:
            return
        self._debounce_task = asyncio.create_task(
            self._debounce(query, self._generation)
        )
        self._set_state(SearchState.DEBOUNCING)

    def submit(self, text: Optional[str] = None):
        """Search immediately, skipping the debounce (keyboard submit or a recent search tap)."""
        query = self._validate(self._query if text is None else text)
        if query is None:
            return
        self._start_search(query, self._generation)

    def select_recent(self, query: str):
        self.submit(query)

    def remove_recent(self, query: str):
        self.recent_searches.remove(query)
        self._set_state(self._state)

    def clear_recent(self):
        self.recent_searches.clear()
        self._set_state(self._state)

    def clear(self):
        """Reset text, errors and results and cancel any pending work."""
        self._generation += 1
        self._cancel_pending()
        self._query = ""
        self._validation_error = None
        self._error = None
        self._results = []
        self._set_state(SearchState.IDLE)

    async def close(self):
        """Cancel pending work and wait for it to unwind."""
        pending = [
            task
            for task in (self._debounce_task, self._search_task)
            if task is not None and not task.done()
        ]
        self._generation += 1
        self._cancel_pending()
        self._results = []
        self._error = None
        self._set_state(SearchState.IDLE)
        if pending:
            await asyncio.wait(pending)

    async def wait_idle(self):
        """Wait until no debounce timer or request is outstanding."""
        while True:
            pending = [
                task
                for task in (self._debounce_task, self._search_task)
                if task is not None and not task.done()
            ]
            if not pending:
                return
            await asyncio.wait(pending)

    async def _debounce(self, query: str, generation: int):
        await asyncio.sleep(self.debounce_seconds)
        if generation != self._generation:
            return
        self._debounce_task = None
        self._start_search(query, generation)

    def _start_search(self, query: str, generation: int):
        if self._search_task is not None and not self._search_task.done():
            logger.debug("Cancelling superseded search request")
            self._search_task.cancel()
        self._last_search_at = datetime.now(timezone.utc)
        self._search_task = asyncio.create_task(self._run_search(query, generation))
        self._set_state(SearchState.IN_FLIGHT)

    async def _run_search(self, query: str, generation: int):
        logger.info(f"Searching for '{query}'")
        try:
            results = await self.resolver.resolve(query)
        except ResolutionError as e:
            if generation != self._generation:
                return
            logger.warning(f"Search for '{query}' failed: {e}")
            self._error = e
            self._results = []
            self._set_state(SearchState.FAILED)
            return

        if generation != self._generation:
            logger.debug(f"Discarding stale results for '{query}'")
            return

        self.recent_searches.record(query)
        self._results = results
        self._set_state(SearchState.RESOLVED)
