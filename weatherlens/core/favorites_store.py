"""Persisted set of favorite locations."""

import asyncio
import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from weatherlens.core.storage import KeyValueStore
from weatherlens.models.location import FavoriteLocation

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favoriteCities"

_favorites_adapter = TypeAdapter(List[FavoriteLocation])


class FavoritesStore:
    """
    Favorites loaded once from the key-value store and rewritten in full on
    every change. Locations are matched by structural identity, so the same
    place resolved twice is one favorite.
    """

    def __init__(self, storage: KeyValueStore, key: str = FAVORITES_KEY):
        self.storage = storage
        self.key = key
        self._lock = asyncio.Lock()
        self._favorites: List[FavoriteLocation] = self._load()

    def _load(self) -> List[FavoriteLocation]:
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            favorites = _favorites_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Discarding unreadable favorites: {e}")
            return []

        # Older saves may hold duplicates of the same place.
        unique = list(dict.fromkeys(favorites))
        logger.info(f"Loaded {len(unique)} favorite location(s)")
        return unique

    def _save(self):
        self.storage.set(self.key, _favorites_adapter.dump_json(self._favorites).decode())

    def list(self) -> List[FavoriteLocation]:
        return list(self._favorites)

    def is_favorite(self, location: FavoriteLocation) -> bool:
        return location in self._favorites

    async def toggle(self, location: FavoriteLocation) -> bool:
        """Add or remove location; returns True if it is now a favorite."""
        async with self._lock:
            if location in self._favorites:
                self._favorites.remove(location)
                is_favorite = False
                logger.info(f"Removed favorite: {location.display_name}")
            else:
                self._favorites.append(location)
                is_favorite = True
                logger.info(f"Added favorite: {location.display_name}")
            self._save()
            return is_favorite

    async def remove(self, location: FavoriteLocation):
        async with self._lock:
            if location not in self._favorites:
                return
            self._favorites.remove(location)
            self._save()
            logger.info(f"Removed favorite: {location.display_name}")
