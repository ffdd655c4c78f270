"""
Coordinate parsing for user-entered latitude/longitude strings.
"""
from __future__ import annotations

import math
from typing import Optional

from placetypes.domain.errors import InvalidCoordinate
from placetypes.domain.models import Coordinate, format_degrees

GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="


def _parse_degrees(field_name: str, raw: Optional[str], bound: float) -> float:
    if raw is None or not str(raw).strip():
        raise InvalidCoordinate(field_name, raw, "an empty input was given")
    text = str(raw).strip()
    if "_" in text:
        raise InvalidCoordinate(field_name, raw, "must be a decimal number")
    try:
        value = float(text)
    except ValueError:
        raise InvalidCoordinate(field_name, raw, "must be a decimal number") from None
    if not math.isfinite(value):
        raise InvalidCoordinate(field_name, raw, "must be a finite number")
    if value < -bound or value > bound:
        raise InvalidCoordinate(field_name, raw, f"must be between {-bound:g} and {bound:g}")
    return value


def parse_coordinate(lat_raw: Optional[str], lon_raw: Optional[str]) -> Coordinate:
    """
    Validate two raw tokens into a Coordinate.

    Rules:
    - Both tokens must be non-empty and parse as base-10 floats.
    - Latitude must lie in [-90, 90] and longitude in [-180, 180], inclusive.

    Raises InvalidCoordinate naming the offending field and raw value.
    """
    lat = _parse_degrees("latitude", lat_raw, 90.0)
    lon = _parse_degrees("longitude", lon_raw, 180.0)
    return Coordinate(lat, lon)


def parse_location_pair(raw: Optional[str]) -> Coordinate:
    """Parse a single "lat,lon" token, as stored in the DEVICE_LOCATION setting."""
    if raw is None or "," not in raw:
        raise InvalidCoordinate("location", raw, "expected 'latitude,longitude'")
    lat_raw, lon_raw = raw.split(",", 1)
    return parse_coordinate(lat_raw, lon_raw)


def maps_search_url(coordinate: Coordinate) -> str:
    """Google Maps URL that shows the coordinate in a browser."""
    return (
        f"{GOOGLE_MAPS_SEARCH_URL}"
        f"{format_degrees(coordinate.latitude)}%2C{format_degrees(coordinate.longitude)}"
    )
