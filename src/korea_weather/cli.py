"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time

from korea_weather import __version__
from korea_weather.app import App, create_app
from korea_weather.config import get_settings
from korea_weather.display import forecast_label, format_temp, icon_to_emoji
from korea_weather.errors import CapacityExceeded, DuplicateFavorite, InvalidInput, ProviderUnavailable
from korea_weather.location import default_location, fixed_position, resolve_current_location
from korea_weather.schemas import Coordinate, FavoriteCandidate, Location


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="korea-weather",
        description="Current weather for your location and saved places in Korea",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    weather_parser = subparsers.add_parser("weather", help="Show weather for a place")
    weather_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    weather_parser.add_argument("--lon", type=float, default=None, help="Longitude")
    weather_parser.add_argument("--place", type=str, default=None, help="District name (e.g. 종로구)")

    search_parser = subparsers.add_parser("search", help="Search district names")
    search_parser.add_argument("query", type=str, help="Search text")
    search_parser.add_argument("--limit", type=int, default=10, help="Maximum results (default: 10)")

    fav_parser = subparsers.add_parser("favorites", help="Manage favorite places")
    fav_sub = fav_parser.add_subparsers(dest="action", help="Favorites actions")
    fav_sub.add_parser("list", help="List favorites")
    add_parser = fav_sub.add_parser("add", help="Add a favorite (toggle off if already saved)")
    add_parser.add_argument("--lat", type=float, required=True)
    add_parser.add_argument("--lon", type=float, required=True)
    add_parser.add_argument("--name", type=str, default=None, help="Display name (default: geocoded)")
    remove_parser = fav_sub.add_parser("remove", help="Remove a favorite")
    remove_parser.add_argument("id", type=str)
    rename_parser = fav_sub.add_parser("rename", help="Rename a favorite ('' resets)")
    rename_parser.add_argument("id", type=str)
    rename_parser.add_argument("name", type=str)

    return parser


# =============================================================================
# Commands
# =============================================================================


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Data dir: {settings.data_dir}")
    return 0


async def _resolve_location(app: App, args: argparse.Namespace) -> Location | None:
    if args.place:
        coord = await app.geocoder.name_to_coord(args.place)
        if coord is None:
            return None
        return Location(lat=coord.lat, lon=coord.lon, name=args.place)
    default = default_location(app.settings)
    if args.lat is None or args.lon is None:
        return default
    coord = Coordinate.of(args.lat, args.lon)
    return await resolve_current_location(fixed_position(coord), app.geocoder, default)


async def _weather(args: argparse.Namespace) -> int:
    app = await create_app(get_settings())
    location = await _resolve_location(app, args)
    if location is None:
        print(f"No place found for {args.place!r}", file=sys.stderr)
        return 1

    coord = location.coordinate
    snapshot = await app.weather.current_weather(coord)
    extremes = await app.weather.display_extremes(coord)
    hourly = await app.weather.hourly_forecast(coord)

    star = " ★" if app.favorites.is_favorite(coord) else ""
    print(f"{location.name}{star}")
    print(f"  {icon_to_emoji(snapshot.icon)} {format_temp(snapshot.temp)} {snapshot.description}")
    print(f"  최저 {format_temp(extremes.temp_min)} / 최고 {format_temp(extremes.temp_max)}")
    print(f"  체감 {format_temp(snapshot.feels_like)}  습도 {snapshot.humidity:.0f}%  바람 {snapshot.wind_speed}m/s")
    now = time.time()
    for entry in hourly:
        print(f"  {forecast_label(entry.epoch_seconds, now):>4} {format_temp(entry.temp)}")
    return 0


def cmd_weather(args: argparse.Namespace) -> int:
    """Handle the 'weather' command."""
    try:
        return asyncio.run(_weather(args))
    except (InvalidInput, ProviderUnavailable) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


async def _search(args: argparse.Namespace) -> int:
    app = await create_app(get_settings())
    results = await app.districts.search(args.query, args.limit)
    for result in results:
        print(result.display_name)
    if not results:
        print("No matching districts.", file=sys.stderr)
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    """Handle the 'search' command."""
    try:
        return asyncio.run(_search(args))
    except InvalidInput as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


async def _favorites(args: argparse.Namespace) -> int:
    app = await create_app(get_settings())
    store = app.favorites

    if args.action == "add":
        coord = Coordinate.of(args.lat, args.lon)
        name = args.name or await app.geocoder.coord_to_name(coord)
        candidate = FavoriteCandidate(name=name, original_name=name, lat=coord.lat, lon=coord.lon)
        result = await store.toggle(coord, candidate)
        verb = "Added" if result.added else "Removed"
        print(f"{verb}: {result.favorite.display_name} ({result.favorite.id})")
    elif args.action == "remove":
        await store.remove(args.id)
        print(f"Removed: {args.id}")
    elif args.action == "rename":
        renamed = await store.rename(args.id, args.name)
        if renamed is None:
            print(f"No favorite with id {args.id}", file=sys.stderr)
            return 1
        print(f"Renamed: {renamed.display_name}")
    else:
        for fav in store.favorites:
            print(f"{fav.id}  {fav.display_name}  ({fav.lat:.4f}, {fav.lon:.4f})")
        print(f"{store.count}/{store.max_count}")
    return 0


def cmd_favorites(args: argparse.Namespace) -> int:
    """Handle the 'favorites' command."""
    try:
        return asyncio.run(_favorites(args))
    except (CapacityExceeded, DuplicateFavorite, InvalidInput) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug or get_settings().debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "weather": cmd_weather,
        "search": cmd_search,
        "favorites": cmd_favorites,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
