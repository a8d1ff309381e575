"""Kakao Local API: coordinate to administrative region name.

Docs: https://developers.kakao.com/docs/latest/ko/local/dev-guide#coord-to-address
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import requests

from korea_weather.datasources.geocoding.client import KAKAO_LOCAL_API, REGION_1_DISPLAY_NAMES, Outcome
from korea_weather.services.http import session as default_session

if TYPE_CHECKING:
    from korea_weather.schemas import Coordinate


def _region_part(address: dict[str, Any], key: str) -> str:
    value = address.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        msg = f"{key} must be a string, got {type(value).__name__}"
        raise TypeError(msg)
    return value.strip()


def format_region_name(address: dict[str, Any]) -> str | None:
    """Join region 1/2/3 with spaces, e.g. "서울특별시 관악구 봉천동".

    Raises ``TypeError`` when a region field is present but not a string.
    """
    region1 = _region_part(address, "region_1depth_name")
    if not region1:
        return None
    region1 = REGION_1_DISPLAY_NAMES.get(region1, region1)
    region2 = _region_part(address, "region_2depth_name")
    region3 = _region_part(address, "region_3depth_name")
    return " ".join(part for part in (region1, region2, region3) if part) or None


class KakaoRegionProvider:
    """Regional hierarchical lookup (``coord2address``)."""

    name = "kakao"

    def __init__(
        self,
        api_key: str,
        base_url: str = KAKAO_LOCAL_API,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or default_session

    async def __call__(self, coord: Coordinate) -> Outcome[str]:
        if not self.api_key:
            return Outcome.failed("missing Kakao REST API key")

        params = {"x": str(coord.lon), "y": str(coord.lat), "input_coord": "WGS84"}
        headers = {"Authorization": f"KakaoAK {self.api_key}"}
        try:
            resp = await asyncio.to_thread(
                self.session.get,
                f"{self.base_url}/geo/coord2address.json",
                params=params,
                headers=headers,
            )
            resp.raise_for_status()
            data: dict[str, Any] = resp.json()
            documents = data.get("documents") or []
            address = (documents[0] or {}).get("address") if documents else None
            if not address:
                return Outcome.failed("coord2address returned no address")
            if not isinstance(address, dict):
                return Outcome.failed(f"coord2address address is not an object: {address!r:.80}")
            name = format_region_name(address)
        except (requests.RequestException, ValueError, LookupError, AttributeError, TypeError) as exc:
            return Outcome.failed(f"coord2address request failed: {exc!r}")

        if name is None:
            return Outcome.failed("coord2address returned no region_1depth_name")
        return Outcome.found(name)
