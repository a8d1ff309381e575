"""Gazetteer loaders.

The gazetteer is a JSON array of ``"City-District-Subdistrict"`` strings
(``korea_districts.json``). A loader is an async callable returning that
list; anything that is not a JSON array of strings is a load failure.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import requests

from korea_weather.services.http import session as default_session

if TYPE_CHECKING:
    from pathlib import Path

GazetteerLoader = Callable[[], Awaitable[list[str]]]


def parse_gazetteer(data: Any) -> list[str]:
    """Validate a decoded gazetteer payload."""
    if not isinstance(data, list):
        msg = f"Gazetteer must be a JSON array, got {type(data).__name__}"
        raise ValueError(msg)
    bad = [item for item in data if not isinstance(item, str)]
    if bad:
        msg = f"Gazetteer contains {len(bad)} non-string entries"
        raise ValueError(msg)
    return data


def file_loader(path: Path) -> GazetteerLoader:
    """Load the gazetteer from a local JSON file."""

    def _read() -> list[str]:
        with path.open(encoding="utf-8") as f:
            return parse_gazetteer(json.load(f))

    async def load() -> list[str]:
        return await asyncio.to_thread(_read)

    return load


def url_loader(url: str, session: requests.Session | None = None) -> GazetteerLoader:
    """Fetch the gazetteer over HTTP."""
    http = session or default_session

    def _fetch() -> list[str]:
        resp = http.get(url)
        resp.raise_for_status()
        return parse_gazetteer(resp.json())

    async def load() -> list[str]:
        return await asyncio.to_thread(_fetch)

    return load
