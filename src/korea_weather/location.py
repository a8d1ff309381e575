"""Current-location resolution.

Device positioning is an external capability: anything satisfying
``PositionProvider`` can be plugged in. When it fails, the app shows the
configured default location (Seoul) instead.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from korea_weather.errors import PositionUnavailable
from korea_weather.schemas import Coordinate, Location

if TYPE_CHECKING:
    from korea_weather.config import Settings
    from korea_weather.datasources.geocoding import GeocodingChain

logger = logging.getLogger(__name__)


class PositionProvider(Protocol):
    """Returns the device position or raises ``PositionUnavailable``."""

    async def __call__(self) -> Coordinate: ...


def fixed_position(coord: Coordinate) -> PositionProvider:
    """A provider that always reports ``coord``."""

    async def position() -> Coordinate:
        return coord

    return position


def default_location(settings: Settings) -> Location:
    return Location(lat=settings.default_lat, lon=settings.default_lon, name=settings.default_name)


async def resolve_current_location(
    position: PositionProvider,
    geocoder: GeocodingChain,
    default: Location,
) -> Location:
    """Device position named through the geocoding chain, or ``default``."""
    try:
        coord = await position()
    except PositionUnavailable as exc:
        logger.warning("Position unavailable, using %s: %s", default.name, exc)
        return default
    name = await geocoder.coord_to_name(coord)
    return Location(lat=coord.lat, lon=coord.lon, name=name)
