"""OpenWeatherMap Geocoding API (reverse and direct).

Docs: https://openweathermap.org/api/geocoding-api
"""

from __future__ import annotations

import asyncio
from typing import Any

import requests

from korea_weather.datasources.geocoding.client import OPENWEATHER_GEO_API, Outcome
from korea_weather.errors import InvalidInput
from korea_weather.schemas import Coordinate
from korea_weather.services.http import session as default_session

#: Direct lookups are restricted to South Korea.
COUNTRY_CODE = "KR"


class _OpenWeatherGeo:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_GEO_API,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or default_session

    async def _get_list(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        resp = await asyncio.to_thread(
            self.session.get,
            f"{self.base_url}{path}",
            params={**params, "limit": 1, "appid": self.api_key},
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, list) or not all(isinstance(p, dict) for p in data):
            msg = f"expected a JSON array of objects, got {data!r:.80}"
            raise ValueError(msg)
        return data


class ReverseNameProvider(_OpenWeatherGeo):
    """Coordinate to place name, preferring the Korean localized name."""

    name = "openweather-reverse"

    async def __call__(self, coord: Coordinate) -> Outcome[str]:
        try:
            places = await self._get_list("/reverse", {"lat": coord.lat, "lon": coord.lon})
        except (requests.RequestException, ValueError) as exc:
            return Outcome.failed(f"reverse request failed: {exc!r}")
        if not places:
            return Outcome.empty()

        place = places[0]
        local_names = place.get("local_names")
        name = (local_names.get("ko") if isinstance(local_names, dict) else None) or place.get("name")
        if not name:
            return Outcome.failed("reverse result has no name")
        return Outcome.found(str(name))


class DirectCoordinateProvider(_OpenWeatherGeo):
    """Free-text place name to coordinate."""

    name = "openweather-direct"

    async def __call__(self, text: str) -> Outcome[Coordinate]:
        try:
            places = await self._get_list("/direct", {"q": f"{text},{COUNTRY_CODE}"})
        except (requests.RequestException, ValueError) as exc:
            return Outcome.failed(f"direct request failed: {exc!r}")
        if not places:
            return Outcome.empty()

        place = places[0]
        try:
            return Outcome.found(Coordinate.of(place.get("lat"), place.get("lon")))
        except InvalidInput as exc:
            return Outcome.failed(str(exc))
