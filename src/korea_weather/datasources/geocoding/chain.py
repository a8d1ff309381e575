"""Ordered geocoding fallback chain.

Each provider has partial national coverage and its own uptime, so
``coord_to_name`` tries them in order and always ends with a usable name.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from korea_weather.datasources.geocoding.client import DEFAULT_PLACE_NAME, Provider, call_provider, run_chain
from korea_weather.datasources.geocoding.kakao import KakaoRegionProvider
from korea_weather.datasources.geocoding.openweather import DirectCoordinateProvider, ReverseNameProvider

if TYPE_CHECKING:
    import requests

    from korea_weather.config import Settings
    from korea_weather.schemas import Coordinate

logger = logging.getLogger(__name__)


class GeocodingChain:
    """Reverse lookup through a provider chain, forward lookup through one provider."""

    def __init__(
        self,
        reverse: Sequence[Provider[Coordinate, str]],
        forward: Provider[str, Coordinate],
        default_name: str = DEFAULT_PLACE_NAME,
    ) -> None:
        self.reverse = tuple(reverse)
        self.forward = forward
        self.default_name = default_name

    @classmethod
    def from_settings(cls, settings: Settings, session: requests.Session | None = None) -> GeocodingChain:
        """Kakao region lookup first, OpenWeatherMap reverse geocoding second."""
        return cls(
            reverse=[
                KakaoRegionProvider(settings.kakao_rest_api_key, settings.kakao_api_base_url, session),
                ReverseNameProvider(settings.openweather_api_key, settings.geo_api_base_url, session),
            ],
            forward=DirectCoordinateProvider(settings.openweather_api_key, settings.geo_api_base_url, session),
        )

    async def coord_to_name(self, coord: Coordinate) -> str:
        """Human-readable name for ``coord``. Never raises."""
        return await run_chain(self.reverse, coord, self.default_name)

    async def name_to_coord(self, text: str) -> Coordinate | None:
        """Coordinate for a free-text place name, or None when nothing matched."""
        text = (text or "").strip()
        if not text:
            return None
        outcome = await call_provider(self.forward, text)
        if outcome.error is not None:
            logger.error("Forward geocoding of %r failed: %s", text, outcome.error)
            return None
        return outcome.value
