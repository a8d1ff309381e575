"""Today's min/max temperature derived from the 3-hour forecast.

The ``/weather`` endpoint reports min/max across the current observation
area, not across the day, so the daily range comes from the forecast
samples that fall inside today's local calendar day.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from zoneinfo import ZoneInfo

from korea_weather.schemas import DailyExtremes, ForecastEntry, WeatherSnapshot

SECONDS_PER_DAY = 86_400

KST = ZoneInfo("Asia/Seoul")


def local_day_start(now_epoch_seconds: float, tz: ZoneInfo = KST) -> int:
    """Epoch seconds of local midnight for the day containing ``now``."""
    local = datetime.fromtimestamp(now_epoch_seconds, tz)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp())


def derive_today_extremes(
    forecast: Iterable[ForecastEntry],
    now_epoch_seconds: float,
    day_start: Callable[[float], int] = local_day_start,
) -> DailyExtremes | None:
    """
    Min/max of ``temp`` over entries in ``[midnight, midnight + 86400)``.

    Args:
        forecast: Forecast entries, any order.
        now_epoch_seconds: Reference "now".
        day_start: Maps ``now`` to the local midnight in epoch seconds.

    Returns:
        ``DailyExtremes``, or None when no entry falls in today's window.
        None is not a zero reading: callers fall back to the snapshot.
    """
    start = day_start(now_epoch_seconds)
    end = start + SECONDS_PER_DAY
    temps = [e.temp for e in forecast if start <= e.epoch_seconds < end]
    if not temps:
        return None
    return DailyExtremes(temp_min=min(temps), temp_max=max(temps))


def resolve_display_extremes(extremes: DailyExtremes | None, snapshot: WeatherSnapshot) -> DailyExtremes:
    """Prefer the forecast-derived range, else the snapshot's own min/max."""
    if extremes is not None:
        return extremes
    return DailyExtremes(temp_min=snapshot.temp_min, temp_max=snapshot.temp_max)
