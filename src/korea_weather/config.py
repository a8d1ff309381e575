"""Application settings loaded from the environment (and ``.env``)."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    API keys are optional: without them the weather provider rejects the
    request (surfaced as ``ProviderUnavailable``) and the geocoding chain
    falls through to its default name.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "korea-weather"
    app_env: str = "development"
    debug: bool = False

    openweather_api_key: str = ""
    kakao_rest_api_key: str = ""

    weather_api_base_url: str = "https://api.openweathermap.org/data/2.5"
    geo_api_base_url: str = "https://api.openweathermap.org/geo/1.0"
    kakao_api_base_url: str = "https://dapi.kakao.com/v2/local"
    http_timeout: float = Field(default=10.0, gt=0)

    data_dir: Path = Path("data")
    gazetteer_path: Path = Path("data/korea_districts.json")

    # Seoul City Hall
    default_lat: float = Field(default=37.5665, ge=-90, le=90)
    default_lon: float = Field(default=126.978, ge=-180, le=180)
    default_name: str = "서울특별시"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
