"""Korean administrative district gazetteer.

Public API:
  - index: DistrictSearchIndex, coordinates_for
  - client: file_loader, url_loader, parse_gazetteer
"""

from korea_weather.datasources.districts.client import (
    GazetteerLoader,
    file_loader,
    parse_gazetteer,
    url_loader,
)
from korea_weather.datasources.districts.index import DEFAULT_LIMIT, DistrictSearchIndex, coordinates_for

__all__ = [
    "DEFAULT_LIMIT",
    "DistrictSearchIndex",
    "GazetteerLoader",
    "coordinates_for",
    "file_loader",
    "parse_gazetteer",
    "url_loader",
]
