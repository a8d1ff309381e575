"""Formatting helpers for temperatures, icons and forecast times.

Pure conversion functions with no external dependencies.
"""

from __future__ import annotations

import math
from datetime import datetime
from zoneinfo import ZoneInfo

KST = ZoneInfo("Asia/Seoul")

# OpenWeatherMap icon codes (https://openweathermap.org/weather-conditions),
# matched on the two-digit prefix; the d/n suffix is ignored.
ICON_EMOJI: dict[str, str] = {
    "01": "☀️",  # clear
    "02": "⛅",  # few clouds
    "03": "☁️",  # scattered clouds
    "04": "☁️",  # broken clouds
    "09": "\U0001f327️",  # shower rain
    "10": "\U0001f326️",  # rain
    "11": "⛈️",  # thunderstorm
    "13": "❄️",  # snow
    "50": "\U0001f32b️",  # mist
}

#: Forecast steps closer to "now" than this are labelled "지금".
NOW_WINDOW_SECONDS = 2 * 60 * 60


def format_temp(celsius: float) -> str:
    """Round half up to a whole degree, e.g. ``"23°"``."""
    return f"{math.floor(celsius + 0.5)}°"


def icon_to_emoji(icon: str) -> str:
    """Map an icon code like ``"10d"`` to an emoji; unknown codes show clear sky."""
    return ICON_EMOJI.get(icon[:2], ICON_EMOJI["01"])


def forecast_label(epoch_seconds: int, now_epoch_seconds: float, tz: ZoneInfo = KST) -> str:
    """``"지금"`` within two hours of now, else the local hour (``"15시"``)."""
    if abs(epoch_seconds - now_epoch_seconds) < NOW_WINDOW_SECONDS:
        return "지금"
    return f"{datetime.fromtimestamp(epoch_seconds, tz).hour}시"
