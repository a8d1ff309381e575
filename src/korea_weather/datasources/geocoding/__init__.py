"""Geocoding data sources.

Public API:
  - chain: GeocodingChain (coord_to_name with fallback, name_to_coord)
  - client: Outcome, run_chain, DEFAULT_PLACE_NAME
  - kakao: KakaoRegionProvider (region hierarchy)
  - openweather: ReverseNameProvider, DirectCoordinateProvider
"""

from korea_weather.datasources.geocoding.chain import GeocodingChain
from korea_weather.datasources.geocoding.client import DEFAULT_PLACE_NAME, Outcome, run_chain
from korea_weather.datasources.geocoding.kakao import KakaoRegionProvider, format_region_name
from korea_weather.datasources.geocoding.openweather import (
    DirectCoordinateProvider,
    ReverseNameProvider,
)

__all__ = [
    "DEFAULT_PLACE_NAME",
    "DirectCoordinateProvider",
    "GeocodingChain",
    "KakaoRegionProvider",
    "Outcome",
    "ReverseNameProvider",
    "format_region_name",
    "run_chain",
]
