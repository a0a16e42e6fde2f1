"""Bounded, most-recent-first list of submitted search queries."""

import json
import logging
from typing import List, Optional

from weatherlens.config import settings
from weatherlens.core.storage import KeyValueStore

logger = logging.getLogger(__name__)

RECENT_SEARCHES_KEY = "recentSearches"


class RecentSearches:
    def __init__(
        self,
        storage: KeyValueStore,
        limit: Optional[int] = None,
        key: str = RECENT_SEARCHES_KEY,
    ):
        self.storage = storage
        self.limit = limit if limit is not None else settings.recent_searches_limit
        self.key = key
        self._items: List[str] = self._load()

    def _load(self) -> List[str]:
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.error(f"Discarding unreadable recent searches: {e}")
            return []
        if not isinstance(items, list):
            return []
        unique = list(dict.fromkeys(str(item) for item in items))
        return unique[: self.limit]

    def _save(self):
        self.storage.set(self.key, json.dumps(self._items))

    @property
    def items(self) -> List[str]:
        return list(self._items)

    def record(self, query: str):
        """Move query to the front, dropping the oldest entry past the limit."""
        if query in self._items:
            self._items.remove(query)
        self._items.insert(0, query)
        del self._items[self.limit :]
        self._save()

    def remove(self, query: str):
        if query in self._items:
            self._items.remove(query)
            self._save()

    def clear(self):
        self._items = []
        self._save()
