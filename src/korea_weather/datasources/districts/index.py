"""In-memory substring search over the district gazetteer."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import requests

from korea_weather.errors import InvalidInput
from korea_weather.schemas import SearchResult

if TYPE_CHECKING:
    from korea_weather.datasources.districts.client import GazetteerLoader
    from korea_weather.datasources.geocoding import GeocodingChain
    from korea_weather.schemas import Coordinate

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


class DistrictSearchIndex:
    """Lazily loaded, immutable-once-loaded district index.

    The first query triggers the load. A successful load is kept for the
    lifetime of the instance; a failed load leaves the index empty and the
    next query tries again. ``reset()`` drops the loaded data (tests only).
    """

    def __init__(self, loader: GazetteerLoader) -> None:
        self._loader = loader
        self._districts: tuple[str, ...] | None = None
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._districts is not None

    def reset(self) -> None:
        self._districts = None

    async def _ensure_loaded(self) -> tuple[str, ...]:
        if self._districts is not None:
            return self._districts
        async with self._lock:
            if self._districts is None:
                try:
                    districts = await self._loader()
                except (OSError, ValueError, requests.RequestException) as exc:
                    logger.error("Failed to load district gazetteer: %s", exc)
                    return ()
                self._districts = tuple(districts)
                logger.debug("Loaded %d districts", len(self._districts))
        return self._districts

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[SearchResult]:
        """
        Case-insensitive substring search in gazetteer order.

        Args:
            query: Free text; blank queries return [] without loading.
            limit: Maximum number of results (>= 1).

        Returns:
            Up to ``limit`` results, in the gazetteer's stored order.
        """
        if limit < 1:
            msg = f"limit must be >= 1, got {limit}"
            raise InvalidInput(msg)
        if not query or not query.strip():
            return []

        needle = query.strip().lower()
        results: list[SearchResult] = []
        for key in await self._ensure_loaded():
            if needle in key.lower():
                results.append(SearchResult.from_key(key))
                if len(results) >= limit:
                    break
        return results


async def coordinates_for(result: SearchResult, geocoder: GeocodingChain) -> Coordinate | None:
    """Resolve a chosen district to coordinates via forward geocoding."""
    return await geocoder.name_to_coord(result.display_name)
