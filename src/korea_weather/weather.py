"""Cached weather queries for the presentation layer.

Cache keys are ``(topic, lat, lon)``. The daily extremes are derived from
the cached forecast, so a forecast fetch serves both topics.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from korea_weather.cache import CURRENT_WEATHER_TTL_MS, EXTREMES_TTL_MS, FORECAST_TTL_MS, QueryCache
from korea_weather.datasources.weather.extremes import (
    derive_today_extremes,
    local_day_start,
    resolve_display_extremes,
)

if TYPE_CHECKING:
    from korea_weather.datasources.weather import WeatherClient
    from korea_weather.schemas import Coordinate, DailyExtremes, ForecastEntry, WeatherSnapshot

TOPIC_CURRENT = "current"
TOPIC_FORECAST = "forecast"
TOPIC_EXTREMES = "minmax"
TOPICS = (TOPIC_CURRENT, TOPIC_FORECAST, TOPIC_EXTREMES)

#: 8 steps of 3 hours = the next 24 hours.
HOURLY_STEPS = 8


class WeatherService:
    """Weather, forecast and today's range for a coordinate, through the cache."""

    def __init__(
        self,
        client: WeatherClient,
        cache: QueryCache | None = None,
        *,
        clock: Callable[[], float] = time.time,
        day_start: Callable[[float], int] = local_day_start,
    ) -> None:
        self.client = client
        self.cache = cache or QueryCache()
        self._clock = clock
        self._day_start = day_start

    async def current_weather(self, coord: Coordinate) -> WeatherSnapshot:
        return await self.cache.get(
            (TOPIC_CURRENT, coord.lat, coord.lon),
            CURRENT_WEATHER_TTL_MS,
            lambda: self.client.get_current_weather(coord),
        )

    async def forecast(self, coord: Coordinate) -> list[ForecastEntry]:
        return await self.cache.get(
            (TOPIC_FORECAST, coord.lat, coord.lon),
            FORECAST_TTL_MS,
            lambda: self.client.get_forecast(coord),
        )

    async def today_extremes(self, coord: Coordinate) -> DailyExtremes | None:
        """Today's min/max from the forecast; None when today has no samples left."""

        async def derive() -> DailyExtremes | None:
            entries = await self.forecast(coord)
            return derive_today_extremes(entries, self._clock(), self._day_start)

        return await self.cache.get((TOPIC_EXTREMES, coord.lat, coord.lon), EXTREMES_TTL_MS, derive)

    async def display_extremes(self, coord: Coordinate) -> DailyExtremes:
        """Today's range, falling back to the current snapshot's min/max."""
        extremes = await self.today_extremes(coord)
        if extremes is not None:
            return extremes
        return resolve_display_extremes(None, await self.current_weather(coord))

    async def hourly_forecast(self, coord: Coordinate, count: int = HOURLY_STEPS) -> list[ForecastEntry]:
        return (await self.forecast(coord))[:count]

    def refresh(self, coord: Coordinate) -> None:
        """Invalidate every topic for ``coord``."""
        for topic in TOPICS:
            self.cache.invalidate((topic, coord.lat, coord.lon))
