"""Tests for the district gazetteer and search index."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import requests

from korea_weather.datasources.districts import (
    DistrictSearchIndex,
    coordinates_for,
    file_loader,
    parse_gazetteer,
    url_loader,
)
from korea_weather.errors import InvalidInput
from korea_weather.schemas import Coordinate, SearchResult

GAZETTEER = [
    "서울특별시",
    "서울특별시-종로구",
    "서울특별시-종로구-청운동",
    "서울특별시-중구-명동",
    "부산광역시-해운대구-우동",
    "경기도-성남시분당구-서현동",
    "Jeju-Seogwipo-Jungmun",
]


def _loader(data: list[str] | None = None) -> AsyncMock:
    return AsyncMock(return_value=list(GAZETTEER if data is None else data))


class TestParseGazetteer:
    """Payload validation."""

    def test_accepts_string_array(self) -> None:
        assert parse_gazetteer(["a", "b"]) == ["a", "b"]

    def test_rejects_object(self) -> None:
        with pytest.raises(ValueError):
            parse_gazetteer({"districts": []})

    def test_rejects_non_strings(self) -> None:
        with pytest.raises(ValueError):
            parse_gazetteer(["a", 1])


class TestLoaders:
    """File and URL loaders."""

    def test_file_loader(self, tmp_path: Path) -> None:
        path = tmp_path / "korea_districts.json"
        path.write_text(json.dumps(GAZETTEER, ensure_ascii=False), encoding="utf-8")
        assert asyncio.run(file_loader(path)()) == GAZETTEER

    def test_file_loader_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            asyncio.run(file_loader(tmp_path / "missing.json")())

    def test_url_loader(self, session: Mock, make_response: Callable[..., requests.Response]) -> None:
        session.get.return_value = make_response(GAZETTEER)
        assert asyncio.run(url_loader("https://cdn.test/korea_districts.json", session)()) == GAZETTEER
        session.get.assert_called_once_with("https://cdn.test/korea_districts.json")


class TestSearch:
    """Substring search semantics."""

    def test_substring_match_in_stored_order(self) -> None:
        index = DistrictSearchIndex(_loader())
        results = asyncio.run(index.search("종로"))
        assert [r.full_name for r in results] == ["서울특별시-종로구", "서울특별시-종로구-청운동"]

    def test_result_structure(self) -> None:
        index = DistrictSearchIndex(_loader())
        (result,) = asyncio.run(index.search("청운"))
        assert result == SearchResult(
            full_name="서울특별시-종로구-청운동",
            display_name="서울특별시 종로구 청운동",
            city="서울특별시",
            district="종로구",
            dong="청운동",
        )

    def test_case_insensitive(self) -> None:
        index = DistrictSearchIndex(_loader())
        assert [r.city for r in asyncio.run(index.search("jEjU"))] == ["Jeju"]

    def test_query_is_trimmed(self) -> None:
        index = DistrictSearchIndex(_loader())
        assert len(asyncio.run(index.search("  명동 "))) == 1

    def test_matches_full_key_including_delimiter(self) -> None:
        index = DistrictSearchIndex(_loader())
        assert [r.full_name for r in asyncio.run(index.search("중구-명"))] == ["서울특별시-중구-명동"]

    def test_limit_stops_early(self) -> None:
        index = DistrictSearchIndex(_loader())
        results = asyncio.run(index.search("서울", limit=2))
        assert [r.full_name for r in results] == ["서울특별시", "서울특별시-종로구"]

    def test_no_match(self) -> None:
        index = DistrictSearchIndex(_loader())
        assert asyncio.run(index.search("평양")) == []

    def test_invalid_limit(self) -> None:
        index = DistrictSearchIndex(_loader())
        with pytest.raises(InvalidInput):
            asyncio.run(index.search("서울", limit=0))


class TestLazyLoading:
    """Load-once behaviour and failure recovery."""

    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_does_not_load(self, query: str) -> None:
        loader = _loader()
        index = DistrictSearchIndex(loader)
        assert asyncio.run(index.search(query)) == []
        loader.assert_not_awaited()
        assert not index.loaded

    def test_loads_once(self) -> None:
        loader = _loader()
        index = DistrictSearchIndex(loader)

        async def queries() -> None:
            await index.search("서울")
            await index.search("부산")

        asyncio.run(queries())
        assert loader.await_count == 1
        assert index.loaded

    def test_concurrent_first_queries_load_once(self) -> None:
        loader = _loader()
        index = DistrictSearchIndex(loader)

        async def queries() -> list[list[SearchResult]]:
            return await asyncio.gather(index.search("서울"), index.search("부산"), index.search("경기"))

        seoul, busan, gyeonggi = asyncio.run(queries())
        assert loader.await_count == 1
        assert len(seoul) == 4
        assert len(busan) == 1
        assert len(gyeonggi) == 1

    def test_failed_load_returns_empty_and_retries(self) -> None:
        loader = AsyncMock(side_effect=[OSError("network down"), list(GAZETTEER)])
        index = DistrictSearchIndex(loader)

        async def queries() -> tuple[list[SearchResult], list[SearchResult]]:
            return await index.search("서울"), await index.search("서울")

        first, second = asyncio.run(queries())
        assert first == []
        assert len(second) == 4
        assert loader.await_count == 2

    def test_invalid_payload_is_a_failed_load(self) -> None:
        loader = AsyncMock(side_effect=ValueError("not a JSON array"))
        index = DistrictSearchIndex(loader)
        assert asyncio.run(index.search("서울")) == []
        assert not index.loaded

    def test_reset_forces_reload(self) -> None:
        loader = _loader()
        index = DistrictSearchIndex(loader)
        asyncio.run(index.search("서울"))
        index.reset()
        assert not index.loaded
        asyncio.run(index.search("서울"))
        assert loader.await_count == 2


class TestCoordinatesFor:
    """District to coordinate through forward geocoding."""

    def test_uses_display_name(self) -> None:
        geocoder = Mock()
        geocoder.name_to_coord = AsyncMock(return_value=Coordinate(lat=37.57, lon=126.98))
        result = SearchResult.from_key("서울특별시-종로구")

        assert asyncio.run(coordinates_for(result, geocoder)) == Coordinate(lat=37.57, lon=126.98)
        geocoder.name_to_coord.assert_awaited_once_with("서울특별시 종로구")
