"""Wiring of the core components from settings.

The presentation layer builds one ``App`` and calls into its parts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from korea_weather.datasources.districts import DistrictSearchIndex, file_loader
from korea_weather.datasources.geocoding import GeocodingChain
from korea_weather.datasources.weather import WeatherClient
from korea_weather.favorites import FavoritesStore
from korea_weather.services.http import create_session
from korea_weather.store import JsonStorage
from korea_weather.weather import WeatherService

if TYPE_CHECKING:
    from korea_weather.config import Settings


@dataclass
class App:
    """The core components sharing one HTTP session."""

    settings: Settings
    weather: WeatherService
    geocoder: GeocodingChain
    districts: DistrictSearchIndex
    favorites: FavoritesStore


async def create_app(settings: Settings) -> App:
    """Build every component and load persisted favorites."""
    session = create_session(timeout=settings.http_timeout)
    favorites = await FavoritesStore.open(JsonStorage(settings.data_dir))
    return App(
        settings=settings,
        weather=WeatherService(WeatherClient.from_settings(settings, session)),
        geocoder=GeocodingChain.from_settings(settings, session),
        districts=DistrictSearchIndex(file_loader(settings.gazetteer_path)),
        favorites=favorites,
    )
