"""OpenWeatherMap client for current weather and the 5-day forecast.

API docs:
  - Current: https://openweathermap.org/current
  - Forecast (5 day / 3 hour): https://openweathermap.org/forecast5

One network call per invocation. No caching (see ``korea_weather.cache``)
and no retries.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import requests

from korea_weather.errors import InvalidInput, ProviderUnavailable
from korea_weather.schemas import Coordinate, ForecastEntry, WeatherSnapshot
from korea_weather.services.http import session as default_session

if TYPE_CHECKING:
    from korea_weather.config import Settings

PROVIDER = "openweathermap"
OPENWEATHER_API = "https://api.openweathermap.org/data/2.5"

# Query parameters sent with every request
UNITS = "metric"
LANG = "kr"


# =============================================================================
# Parsing
# =============================================================================


def parse_current_weather(payload: dict[str, Any]) -> WeatherSnapshot:
    """Map a ``/weather`` response onto a ``WeatherSnapshot``.

    Raises ``KeyError``/``IndexError``/``TypeError`` on malformed payloads;
    the client converts those into ``ProviderUnavailable``.
    """
    main = payload["main"]
    weather = payload["weather"][0]
    return WeatherSnapshot(
        temp=main["temp"],
        feels_like=main["feels_like"],
        temp_min=main["temp_min"],
        temp_max=main["temp_max"],
        humidity=main["humidity"],
        description=weather["description"],
        icon=weather["icon"],
        wind_speed=(payload.get("wind") or {}).get("speed", 0.0),
        observed_at=payload["dt"],
    )


def parse_forecast(payload: dict[str, Any]) -> list[ForecastEntry]:
    """Map a ``/forecast`` response onto chronologically ordered entries."""
    entries = []
    for item in payload["list"]:
        main = item["main"]
        weather = item["weather"][0]
        entries.append(
            ForecastEntry(
                epoch_seconds=item["dt"],
                temp=main["temp"],
                temp_min=main["temp_min"],
                temp_max=main["temp_max"],
                description=weather["description"],
                icon=weather["icon"],
            )
        )
    entries.sort(key=lambda e: e.epoch_seconds)
    return entries


# =============================================================================
# Client
# =============================================================================


class WeatherClient:
    """Thin typed wrapper over the OpenWeatherMap data API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_API,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or default_session

    @classmethod
    def from_settings(cls, settings: Settings, session: requests.Session | None = None) -> WeatherClient:
        return cls(settings.openweather_api_key, settings.weather_api_base_url, session)

    async def get_current_weather(self, coord: Coordinate) -> WeatherSnapshot:
        """Fetch current conditions at ``coord``."""
        payload = await self._get("/weather", coord)
        try:
            return parse_current_weather(payload)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            msg = f"Malformed current weather payload: {exc!r}"
            raise ProviderUnavailable(msg, provider=PROVIDER) from exc

    async def get_forecast(self, coord: Coordinate) -> list[ForecastEntry]:
        """Fetch the 5-day forecast in 3-hour steps at ``coord``."""
        payload = await self._get("/forecast", coord)
        try:
            return parse_forecast(payload)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            msg = f"Malformed forecast payload: {exc!r}"
            raise ProviderUnavailable(msg, provider=PROVIDER) from exc

    async def _get(self, path: str, coord: Coordinate) -> dict[str, Any]:
        if not isinstance(coord, Coordinate):
            msg = f"Expected Coordinate, got {type(coord).__name__}"
            raise InvalidInput(msg)
        # Re-validate in case the instance was built with model_construct()
        coord = Coordinate.of(coord.lat, coord.lon)

        params: dict[str, str | float] = {
            "lat": coord.lat,
            "lon": coord.lon,
            "appid": self.api_key,
            "units": UNITS,
            "lang": LANG,
        }
        url = f"{self.base_url}{path}"
        try:
            resp = await asyncio.to_thread(self.session.get, url, params=params)
            resp.raise_for_status()
            result: dict[str, Any] = resp.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise ProviderUnavailable(f"GET {path} failed", provider=PROVIDER, status=status) from exc
        except requests.RequestException as exc:
            raise ProviderUnavailable(f"GET {path} failed: {exc}", provider=PROVIDER) from exc
        except ValueError as exc:
            raise ProviderUnavailable(f"GET {path} returned invalid JSON", provider=PROVIDER) from exc
        return result
