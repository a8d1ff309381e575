"""Capacity-bounded, persisted favorite places.

Identity is proximity, not equality: two coordinates within
``SAME_PLACE_TOLERANCE`` on both axes are the same place. The store
rejects a second favorite at the same place and caps the collection at
``MAX_FAVORITES``.

The whole list is written on every mutation and read once in ``open()``.
Mutations run one at a time under a lock, since each one awaits the write
between reading and replacing the list.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from collections.abc import Callable
from typing import TYPE_CHECKING

from pydantic import ValidationError

from korea_weather.errors import CapacityExceeded, DuplicateFavorite
from korea_weather.schemas import Coordinate, Favorite, FavoriteCandidate, ToggleResult, is_same_place

if TYPE_CHECKING:
    from korea_weather.store import JsonStorage

logger = logging.getLogger(__name__)

MAX_FAVORITES = 6
FAVORITES_STORAGE_KEY = "weather-app-favorites"


def _now_ms() -> int:
    return int(time.time() * 1000)


def parse_favorites(text: str) -> list[Favorite]:
    """Decode a persisted favorites document.

    Raises ``ValueError`` (including pydantic's ``ValidationError``) when the
    document is not a JSON array of favorite records.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        msg = f"Favorites document must be a JSON array, got {type(data).__name__}"
        raise ValueError(msg)
    return [Favorite.model_validate(item) for item in data]


def dump_favorites(favorites: list[Favorite]) -> str:
    return json.dumps([f.to_record() for f in favorites], ensure_ascii=False)


class FavoritesStore:
    """Saved places, persisted as one JSON array under a fixed storage key."""

    def __init__(
        self,
        storage: JsonStorage,
        favorites: list[Favorite] | None = None,
        *,
        key: str = FAVORITES_STORAGE_KEY,
        max_favorites: int = MAX_FAVORITES,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.storage = storage
        self.key = key
        self.max_count = max_favorites
        self._favorites: list[Favorite] = list(favorites or [])
        self._clock = clock
        self._lock = asyncio.Lock()

    @classmethod
    async def open(
        cls,
        storage: JsonStorage,
        *,
        key: str = FAVORITES_STORAGE_KEY,
        max_favorites: int = MAX_FAVORITES,
        clock: Callable[[], int] = _now_ms,
    ) -> FavoritesStore:
        """Load the persisted list. A corrupt document yields an empty store."""
        text = await storage.aread(key)
        favorites: list[Favorite] = []
        if text is not None:
            try:
                favorites = parse_favorites(text)
            except (ValueError, ValidationError) as exc:
                logger.error("Ignoring unreadable favorites document %r: %s", key, exc)
        return cls(storage, favorites, key=key, max_favorites=max_favorites, clock=clock)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def favorites(self) -> list[Favorite]:
        return list(self._favorites)

    @property
    def count(self) -> int:
        return len(self._favorites)

    @property
    def is_full(self) -> bool:
        return self.count >= self.max_count

    def get(self, favorite_id: str) -> Favorite | None:
        return next((f for f in self._favorites if f.id == favorite_id), None)

    def find_by_coord(self, coord: Coordinate) -> Favorite | None:
        """First stored favorite at the same place as ``coord``."""
        return next((f for f in self._favorites if is_same_place(f.coordinate, coord)), None)

    def is_favorite(self, coord: Coordinate) -> bool:
        return self.find_by_coord(coord) is not None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def add(self, candidate: FavoriteCandidate) -> Favorite:
        """Append a new favorite and persist.

        Raises:
            CapacityExceeded: The store already holds ``max_count`` favorites.
            DuplicateFavorite: A favorite at the same place exists.
        """
        async with self._lock:
            return await self._add(candidate)

    async def remove(self, favorite_id: str) -> None:
        """Remove by id. Unknown ids are ignored."""
        async with self._lock:
            await self._remove(favorite_id)

    async def rename(self, favorite_id: str, name: str) -> Favorite | None:
        """Replace the display alias. An empty name means "use original_name"."""
        async with self._lock:
            current = self.get(favorite_id)
            if current is None:
                return None
            renamed = current.model_copy(update={"name": name})
            await self._save([renamed if f.id == favorite_id else f for f in self._favorites])
            return renamed

    async def toggle(self, coord: Coordinate, candidate: FavoriteCandidate) -> ToggleResult:
        """Remove the favorite at ``coord`` if there is one, else add ``candidate``."""
        async with self._lock:
            existing = self.find_by_coord(coord)
            if existing is not None:
                await self._remove(existing.id)
                return ToggleResult(added=False, favorite=existing)
            return ToggleResult(added=True, favorite=await self._add(candidate))

    async def _add(self, candidate: FavoriteCandidate) -> Favorite:
        if self.is_full:
            raise CapacityExceeded(self.max_count)
        existing = self.find_by_coord(candidate.coordinate)
        if existing is not None:
            raise DuplicateFavorite(existing.id)

        favorite = Favorite(
            id=uuid.uuid4().hex,
            name=candidate.name,
            original_name=candidate.original_name,
            lat=candidate.lat,
            lon=candidate.lon,
            added_at=self._clock(),
        )
        await self._save([*self._favorites, favorite])
        return favorite

    async def _remove(self, favorite_id: str) -> None:
        remaining = [f for f in self._favorites if f.id != favorite_id]
        if len(remaining) != len(self._favorites):
            await self._save(remaining)

    async def _save(self, favorites: list[Favorite]) -> None:
        # Persist first: a failed write leaves memory and disk in agreement.
        await self.storage.awrite(self.key, dump_favorites(favorites))
        self._favorites = favorites
