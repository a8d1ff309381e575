"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import json
from io import StringIO
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

if TYPE_CHECKING:
    from pathlib import Path

import pytest

from korea_weather.app import App
from korea_weather.cli import cmd_favorites, cmd_info, cmd_search, cmd_weather, create_parser, main
from korea_weather.config import Settings
from korea_weather.datasources.geocoding import Outcome, ReverseNameProvider
from korea_weather.errors import ProviderUnavailable
from korea_weather.favorites import FavoritesStore
from korea_weather.schemas import Coordinate, ForecastEntry, WeatherSnapshot
from korea_weather.store import JsonStorage
from korea_weather.weather import WeatherService

SNAPSHOT = WeatherSnapshot(
    temp=18.4,
    feels_like=17.9,
    temp_min=16.0,
    temp_max=20.1,
    humidity=55,
    description="맑음",
    icon="01d",
    wind_speed=2.6,
    observed_at=1760850000,
)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    gazetteer = tmp_path / "korea_districts.json"
    gazetteer.write_text(
        json.dumps(["서울특별시-종로구", "서울특별시-종로구-청운동", "부산광역시-해운대구"], ensure_ascii=False),
        encoding="utf-8",
    )
    return Settings(
        _env_file=None,
        openweather_api_key="",
        kakao_rest_api_key="",
        data_dir=tmp_path / "data",
        gazetteer_path=gazetteer,
    )


def _fav_args(action: str, **kwargs: object) -> argparse.Namespace:
    defaults: dict[str, object] = {"lat": None, "lon": None, "name": None, "id": None}
    defaults.update(kwargs)
    return argparse.Namespace(command="favorites", action=action, debug=False, **defaults)


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "korea-weather"

    def test_parser_has_version(self) -> None:
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        args = create_parser().parse_args(["--debug", "info"])
        assert args.debug is True

    def test_weather_command(self) -> None:
        args = create_parser().parse_args(["weather", "--lat", "37.5", "--lon", "127.0"])
        assert args.command == "weather"
        assert (args.lat, args.lon, args.place) == (37.5, 127.0, None)

    def test_weather_place(self) -> None:
        args = create_parser().parse_args(["weather", "--place", "종로구"])
        assert args.place == "종로구"

    def test_search_command(self) -> None:
        args = create_parser().parse_args(["search", "서울", "--limit", "3"])
        assert (args.query, args.limit) == ("서울", 3)

    def test_search_default_limit(self) -> None:
        assert create_parser().parse_args(["search", "서울"]).limit == 10

    def test_favorites_add(self) -> None:
        args = create_parser().parse_args(["favorites", "add", "--lat", "37.5", "--lon", "127.0", "--name", "집"])
        assert (args.action, args.lat, args.lon, args.name) == ("add", 37.5, 127.0, "집")

    def test_favorites_rename(self) -> None:
        args = create_parser().parse_args(["favorites", "rename", "abc", ""])
        assert (args.action, args.id, args.name) == ("rename", "abc", "")


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_returns_zero(self) -> None:
        assert cmd_info(argparse.Namespace()) == 0

    def test_prints_app_info(self) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_info(argparse.Namespace())
            output = mock_stdout.getvalue()
            assert "Application" in output
            assert "Version" in output


class TestCmdSearch:
    """Tests for cmd_search function."""

    def test_prints_matches(self, settings: Settings) -> None:
        args = argparse.Namespace(query="종로", limit=10)
        with (
            patch("korea_weather.cli.get_settings", return_value=settings),
            patch("sys.stdout", new=StringIO()) as mock_stdout,
        ):
            assert cmd_search(args) == 0
            assert mock_stdout.getvalue().splitlines() == ["서울특별시 종로구", "서울특별시 종로구 청운동"]

    def test_invalid_limit(self, settings: Settings) -> None:
        args = argparse.Namespace(query="종로", limit=0)
        with (
            patch("korea_weather.cli.get_settings", return_value=settings),
            patch("sys.stderr", new=StringIO()),
        ):
            assert cmd_search(args) == 1


class TestCmdFavorites:
    """Tests for cmd_favorites function."""

    def test_add_list_and_toggle_off(self, settings: Settings) -> None:
        with patch("korea_weather.cli.get_settings", return_value=settings):
            with patch("sys.stdout", new=StringIO()) as out:
                assert cmd_favorites(_fav_args("add", lat=37.5735, lon=126.9788, name="종로")) == 0
                assert out.getvalue().startswith("Added: 종로")

            with patch("sys.stdout", new=StringIO()) as out:
                assert cmd_favorites(_fav_args("list")) == 0
                assert "종로" in out.getvalue()
                assert "1/6" in out.getvalue()

            with patch("sys.stdout", new=StringIO()) as out:
                assert cmd_favorites(_fav_args("add", lat=37.574, lon=126.979, name="근처")) == 0
                assert out.getvalue().startswith("Removed: 종로")

    def test_add_without_name_geocodes(self, settings: Settings) -> None:
        # No API keys configured: the chain falls back to the default name.
        with (
            patch("korea_weather.cli.get_settings", return_value=settings),
            patch.object(ReverseNameProvider, "__call__", new=AsyncMock(return_value=Outcome.failed("offline"))),
            patch("sys.stdout", new=StringIO()) as out,
        ):
            assert cmd_favorites(_fav_args("add", lat=35.16, lon=129.16)) == 0
            assert "현재 위치" in out.getvalue()

    def test_rename_unknown(self, settings: Settings) -> None:
        with (
            patch("korea_weather.cli.get_settings", return_value=settings),
            patch("sys.stderr", new=StringIO()),
        ):
            assert cmd_favorites(_fav_args("rename", id="missing", name="x")) == 1

    def test_invalid_coordinate(self, settings: Settings) -> None:
        with (
            patch("korea_weather.cli.get_settings", return_value=settings),
            patch("sys.stderr", new=StringIO()) as err,
        ):
            assert cmd_favorites(_fav_args("add", lat=200.0, lon=0.0, name="x")) == 1
            assert "Invalid coordinate" in err.getvalue()


class TestCmdWeather:
    """Tests for cmd_weather function."""

    def _app(self, settings: Settings, client: Mock) -> App:
        geocoder = Mock()
        geocoder.coord_to_name = AsyncMock(return_value="서울특별시 중구")
        geocoder.name_to_coord = AsyncMock(return_value=None)
        return App(
            settings=settings,
            weather=WeatherService(client),
            geocoder=geocoder,
            districts=Mock(),
            favorites=FavoritesStore(JsonStorage(settings.data_dir)),
        )

    def test_prints_weather(self, settings: Settings) -> None:
        client = Mock()
        client.get_current_weather = AsyncMock(return_value=SNAPSHOT)
        entry = ForecastEntry(epoch_seconds=1760850000, temp=18.0, temp_min=18, temp_max=18, description="", icon="01d")
        client.get_forecast = AsyncMock(return_value=[entry])
        app = self._app(settings, client)
        args = argparse.Namespace(lat=37.5665, lon=126.978, place=None)

        with (
            patch("korea_weather.cli.create_app", new=AsyncMock(return_value=app)),
            patch("sys.stdout", new=StringIO()) as out,
        ):
            assert cmd_weather(args) == 0
            output = out.getvalue()
            assert output.startswith("서울특별시 중구")
            assert "18°" in output
            client.get_current_weather.assert_awaited_once_with(Coordinate(lat=37.5665, lon=126.978))

    def test_provider_unavailable(self, settings: Settings) -> None:
        client = Mock()
        client.get_current_weather = AsyncMock(side_effect=ProviderUnavailable("down", provider="owm", status=503))
        client.get_forecast = AsyncMock(return_value=[])
        app = self._app(settings, client)
        args = argparse.Namespace(lat=None, lon=None, place=None)

        with (
            patch("korea_weather.cli.create_app", new=AsyncMock(return_value=app)),
            patch("sys.stderr", new=StringIO()) as err,
        ):
            assert cmd_weather(args) == 1
            assert "503" in err.getvalue()

    def test_unknown_place(self, settings: Settings) -> None:
        app = self._app(settings, Mock())
        args = argparse.Namespace(lat=None, lon=None, place="없는곳")

        with (
            patch("korea_weather.cli.create_app", new=AsyncMock(return_value=app)),
            patch("sys.stderr", new=StringIO()) as err,
        ):
            assert cmd_weather(args) == 1
            assert "없는곳" in err.getvalue()


class TestMain:
    """Tests for the main entry point."""

    def test_no_command_prints_help(self) -> None:
        with patch("sys.argv", ["korea-weather"]), patch("sys.stdout", new=StringIO()) as out:
            assert main() == 0
            assert "korea-weather" in out.getvalue()

    def test_dispatches_info(self) -> None:
        with patch("sys.argv", ["korea-weather", "info"]), patch("sys.stdout", new=StringIO()) as out:
            assert main() == 0
            assert "Application" in out.getvalue()
