"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request helpers
    └── {feature}.py      # Fetch/derive functions (one per concept)

Current sources:
  - weather/    OpenWeatherMap current conditions, 5-day forecast, daily extremes
  - geocoding/  Kakao + OpenWeatherMap reverse/forward geocoding chain
  - districts/  Static Korean district gazetteer with substring search

All network calls go through ``korea_weather.services.http.session`` and are
run off the event loop with ``asyncio.to_thread``.
"""
