"""Korea Weather - current weather for your location and saved places.

Architecture::

    datasources/   External APIs (OpenWeatherMap weather + geocoding, Kakao, district gazetteer)
    cache.py       In-process TTL cache with request coalescing
    weather.py     Cached weather/forecast/daily-extremes queries
    favorites.py   Capacity-bounded saved places with proximity identity
    store.py       Whole-document JSON storage backing favorites
    search.py      Debounced district search (last query wins)
    location.py    Current-location resolution with default fallback
    services/      Shared utilities (HTTP session with timeout)

Data flow: UI -> weather (cache -> datasources/weather), UI -> favorites
(store), search -> datasources/districts -> datasources/geocoding.
"""

__version__ = "0.1.0"

from korea_weather.config import Settings
from korea_weather.schemas import Coordinate, Favorite, Location

__all__ = ["Coordinate", "Favorite", "Location", "Settings", "__version__"]
