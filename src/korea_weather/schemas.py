"""
Domain models for korea-weather.

Pydantic models for data from external APIs and internal processing.
These define the canonical schema - data sources normalize API responses to these.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from korea_weather.errors import InvalidInput

#: Two coordinates closer than this on both axes are the same place (~1.1 km).
SAME_PLACE_TOLERANCE = 0.01

#: Delimiter used by gazetteer keys ("서울특별시-종로구-청운동").
DISTRICT_DELIMITER = "-"

# =============================================================================
# Geographic
# =============================================================================


class Coordinate(BaseModel):
    """A finite WGS84 point."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    @classmethod
    def of(cls, lat: Any, lon: Any) -> Coordinate:
        """Build a coordinate, raising ``InvalidInput`` instead of a validation error."""
        try:
            return cls(lat=lat, lon=lon)
        except ValidationError as exc:
            msg = f"Invalid coordinate (lat={lat!r}, lon={lon!r})"
            raise InvalidInput(msg) from exc

    def same_place(self, other: Coordinate) -> bool:
        return is_same_place(self, other)


def is_same_place(a: Coordinate, b: Coordinate) -> bool:
    """Proximity identity used by favorites: symmetric and reflexive, not transitive."""
    return abs(a.lat - b.lat) < SAME_PLACE_TOLERANCE and abs(a.lon - b.lon) < SAME_PLACE_TOLERANCE


class Location(BaseModel):
    """A coordinate with a human-readable name."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    name: str

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, lon=self.lon)


# =============================================================================
# Weather
# =============================================================================


class WeatherSnapshot(BaseModel):
    """Current conditions at a point. Superseded, never mutated."""

    model_config = ConfigDict(frozen=True)

    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: float
    description: str
    icon: str
    wind_speed: float
    observed_at: int = Field(..., description="Observation time, epoch seconds")


class ForecastEntry(BaseModel):
    """One 3-hour forecast step."""

    model_config = ConfigDict(frozen=True)

    epoch_seconds: int
    temp: float
    temp_min: float
    temp_max: float
    description: str
    icon: str


class DailyExtremes(BaseModel):
    """Today's min/max temperature."""

    model_config = ConfigDict(frozen=True)

    temp_min: float
    temp_max: float


# =============================================================================
# Favorites
# =============================================================================


class FavoriteCandidate(BaseModel):
    """Input to ``FavoritesStore.add``: everything but the generated fields."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = ""
    original_name: str
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    @classmethod
    def from_location(cls, location: Location) -> FavoriteCandidate:
        return cls(name=location.name, original_name=location.name, lat=location.lat, lon=location.lon)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, lon=self.lon)


class Favorite(BaseModel):
    """A saved place.

    Persisted with the keys ``id, name, originalName, lat, lon, addedAt``.
    Only ``name`` changes after creation (via ``model_copy``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    id: str
    name: str = ""
    original_name: str = Field(..., alias="originalName")
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    added_at: int = Field(..., alias="addedAt", description="Epoch milliseconds")

    @property
    def display_name(self) -> str:
        """The user alias, or the resolved place name when the alias is empty."""
        return self.name or self.original_name

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, lon=self.lon)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToggleResult(BaseModel):
    """Outcome of ``FavoritesStore.toggle``."""

    added: bool
    favorite: Favorite


# =============================================================================
# Search
# =============================================================================


class SearchResult(BaseModel):
    """A gazetteer match, split into its administrative levels."""

    model_config = ConfigDict(frozen=True)

    full_name: str
    display_name: str
    city: str
    district: str | None = None
    dong: str | None = None

    @classmethod
    def from_key(cls, key: str) -> SearchResult:
        parts = key.split(DISTRICT_DELIMITER)
        return cls(
            full_name=key,
            display_name=key.replace(DISTRICT_DELIMITER, " "),
            city=parts[0],
            district=parts[1] if len(parts) > 1 else None,
            dong=parts[2] if len(parts) > 2 else None,
        )
