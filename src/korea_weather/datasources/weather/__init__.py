"""OpenWeatherMap weather data source.

Public API:
  - client: WeatherClient (current weather, 5-day/3-hour forecast), parsers
  - extremes: derive_today_extremes, local_day_start, resolve_display_extremes
"""

from korea_weather.datasources.weather.client import (
    WeatherClient,
    parse_current_weather,
    parse_forecast,
)
from korea_weather.datasources.weather.extremes import (
    derive_today_extremes,
    local_day_start,
    resolve_display_extremes,
)

__all__ = [
    "WeatherClient",
    "derive_today_extremes",
    "local_day_start",
    "parse_current_weather",
    "parse_forecast",
    "resolve_display_extremes",
]
