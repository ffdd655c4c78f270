"""Console front-end for nearby place-type lookups.

Usage:
    placetypes-cli types --lat 41.8781 --lon -87.6298 [--type cafe --type bar]
    placetypes-cli types --here
    placetypes-cli locate [--open]
    placetypes-cli menu

Configuration is read from the environment (and an optional `.env` file in the
working directory): GOOGLE_PLACES_API_KEY, PLACES_SEARCH_RADIUS_M,
PLACES_TIMEOUT_SEC, PLACES_NEARBY_URL and DEVICE_LOCATION.
"""
from __future__ import annotations

import argparse
import logging
import webbrowser
from typing import Callable, List, Optional

from dotenv import load_dotenv

from placetypes.domain.errors import (
    InvalidCoordinate,
    MalformedResponseError,
    NetworkError,
    PlacesTimeoutError,
)
from placetypes.domain.models import Coordinate, NearbyTypesResult, SearchOutcome
from placetypes.services.coordinates import maps_search_url, parse_coordinate
from placetypes.services.device_location import (
    FixedLocationProvider,
    LocationProvider,
    LocationUnavailableError,
)
from placetypes.services.nearby_types import NearbyTypesFinder
from placetypes.services.places_client import PlacesClient
from placetypes.settings import Settings

LOG = logging.getLogger("placetypes.cli")

EXIT_OK = 0
EXIT_LOOKUP_FAILED = 1
EXIT_BAD_INPUT = 2

MENU = """
Press a key to select an option:
1: Output current location
2: Output nearby place types using current location
3: Output nearby place types using inputted location
4: Exit"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank the place types found near a coordinate.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    types_cmd = sub.add_parser("types", help="Output nearby place types.")
    where = types_cmd.add_mutually_exclusive_group(required=True)
    where.add_argument("--here", action="store_true", help="Use the device location.")
    where.add_argument("--lat", help="Latitude in decimal degrees (use with --lon).")
    types_cmd.add_argument("--lon", help="Longitude in decimal degrees.")
    types_cmd.add_argument(
        "--type",
        dest="included_types",
        action="append",
        default=None,
        help="Only search for this place type; repeat to include several.",
    )
    types_cmd.add_argument("--limit", type=int, default=None, help="Show only the top N types.")
    types_cmd.add_argument("--radius", type=int, default=None, help="Search radius in meters.")

    locate_cmd = sub.add_parser("locate", help="Output the current device location.")
    locate_cmd.add_argument("--open", action="store_true", help="View the location in a browser.")

    sub.add_parser("menu", help="Interactive menu.")
    return parser


def print_result(result: NearbyTypesResult) -> None:
    if result.outcome == SearchOutcome.PROVIDER_STATUS:
        print(f"Got an empty response (status: {result.status}).")
        return
    if result.outcome == SearchOutcome.NO_TYPES:
        print("No place types found in the response.")
        return
    print("\nNearby Place Types:")
    for entry in result.types:
        print(f"Count: {entry.count}, Type: {entry.label}")


def output_nearby_place_types(
    finder: NearbyTypesFinder,
    coordinate: Coordinate,
    included_types: Optional[List[str]] = None,
    limit: Optional[int] = None,
) -> int:
    print("Getting nearby place types.")
    try:
        result = finder.find_nearby_place_types(coordinate, included_types, limit=limit)
    except PlacesTimeoutError as exc:
        print(f"Error encountered when making the request: Wait Timeout ({exc})")
        return EXIT_LOOKUP_FAILED
    except NetworkError as exc:
        print(f"Error encountered when making the request: Network Failure ({exc})")
        return EXIT_LOOKUP_FAILED
    except MalformedResponseError as exc:
        print(f"Error encountered when making the request: Invalid JSON ({exc})")
        return EXIT_LOOKUP_FAILED
    except ValueError as exc:
        print(f"Invalid request: {exc}")
        return EXIT_BAD_INPUT
    print_result(result)
    return EXIT_OK


def output_current_location(
    provider: LocationProvider,
    open_browser: bool = False,
    opener: Callable[[str], bool] = webbrowser.open,
) -> int:
    try:
        coordinate = provider.get_current_location()
    except LocationUnavailableError as exc:
        print(exc)
        return EXIT_LOOKUP_FAILED
    print(f"Latitude: {coordinate.latitude}, Longitude {coordinate.longitude}")
    if open_browser:
        open_in_browser(coordinate, opener)
    return EXIT_OK


def open_in_browser(coordinate: Coordinate, opener: Callable[[str], bool] = webbrowser.open) -> bool:
    url = maps_search_url(coordinate)
    try:
        opened = opener(url)
    except webbrowser.Error:
        opened = False
    if not opened:
        print(f"Could not view this URL in a browser: {url}")
    return opened


def read_coordinate(input_fn: Callable[[str], str] = input) -> Optional[Coordinate]:
    """Prompt for a latitude and longitude; print why and return None if invalid or closed."""
    try:
        lat_raw = input_fn("Enter a Latitude: ")
        lon_raw = input_fn("Enter a Longitude: ")
    except EOFError:
        print("An empty input was given.")
        return None
    try:
        return parse_coordinate(lat_raw, lon_raw)
    except InvalidCoordinate as exc:
        if exc.field == "latitude":
            print(f"Invalid Latitude Entry. {exc.reason}.")
        else:
            print(f"Invalid Longitude Entry. {exc.reason}.")
        return None


def run_menu(
    finder: NearbyTypesFinder,
    provider: LocationProvider,
    input_fn: Callable[[str], str] = input,
) -> int:
    while True:
        print(MENU)
        try:
            choice = input_fn("Input: ").strip()
        except EOFError:
            return EXIT_OK
        print()
        if choice == "1":
            try:
                coordinate = provider.get_current_location()
            except LocationUnavailableError as exc:
                print(exc)
                continue
            print(f"Latitude: {coordinate.latitude}, Longitude {coordinate.longitude}")
            try:
                answer = input_fn("y/n: Would you like to view this location in your browser? ")
            except EOFError:
                return EXIT_OK
            if answer.strip().lower() == "y":
                open_in_browser(coordinate)
        elif choice == "2":
            try:
                coordinate = provider.get_current_location()
            except LocationUnavailableError as exc:
                print(exc)
                continue
            output_nearby_place_types(finder, coordinate)
        elif choice == "3":
            coordinate = read_coordinate(input_fn)
            if coordinate is not None:
                output_nearby_place_types(finder, coordinate)
        elif choice == "4":
            return EXIT_OK


def main(
    argv: Optional[list[str]] = None,
    finder: Optional[NearbyTypesFinder] = None,
    provider: Optional[LocationProvider] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    radius = getattr(args, "radius", None)
    if radius is not None and radius <= 0:
        parser.error("--radius must be a positive number of meters")
    if getattr(args, "limit", None) is not None and args.limit <= 0:
        parser.error("--limit must be positive")

    config = Settings()
    if finder is None:
        finder = NearbyTypesFinder(
            client=PlacesClient(timeout=config.PLACES_TIMEOUT_SEC),
            api_key=config.GOOGLE_PLACES_API_KEY,
            radius_m=radius if radius is not None else config.PLACES_SEARCH_RADIUS_M,
            base_url=config.PLACES_NEARBY_URL,
        )
    elif radius is not None:
        finder.radius_m = radius
    if provider is None:
        provider = FixedLocationProvider(config.DEVICE_LOCATION)

    if args.command == "locate":
        return output_current_location(provider, open_browser=args.open)
    if args.command == "menu":
        return run_menu(finder, provider)

    if args.here:
        try:
            coordinate = provider.get_current_location()
        except LocationUnavailableError as exc:
            print(exc)
            return EXIT_LOOKUP_FAILED
    else:
        if args.lon is None:
            parser.error("--lat requires --lon")
        try:
            coordinate = parse_coordinate(args.lat, args.lon)
        except InvalidCoordinate as exc:
            print(exc)
            return EXIT_BAD_INPUT
    LOG.debug("Looking up place types near %s", coordinate.location_param)
    return output_nearby_place_types(finder, coordinate, args.included_types, limit=args.limit)


if __name__ == "__main__":
    raise SystemExit(main())
