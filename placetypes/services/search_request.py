"""
Builds Google Places Nearby Search requests.

Place types documentation:
https://developers.google.com/maps/documentation/places/web-service/supported_types#table1
URL format documentation:
https://developers.google.com/maps/documentation/places/web-service/search-nearby#nearby-search-example
"""
from __future__ import annotations

from typing import Iterable, Optional

from placetypes.domain.models import Coordinate, SearchRequest
from placetypes.settings import DEFAULT_NEARBY_URL


def _normalize_types(included_types: Optional[Iterable[str]]) -> tuple[str, ...]:
    if included_types is None:
        return ()
    if isinstance(included_types, str):
        raise ValueError("included_types must be a sequence of type names, not a string")
    types = tuple(included_types)
    for place_type in types:
        if not isinstance(place_type, str) or not place_type.strip():
            raise ValueError(f"Invalid place type: {place_type!r}")
        if "," in place_type:
            raise ValueError(f"Place type may not contain a comma: {place_type!r}")
    return types


def build_search_request(
    coordinate: Coordinate,
    radius_m: int,
    api_key: str,
    included_types: Optional[Iterable[str]] = None,
    base_url: str = DEFAULT_NEARBY_URL,
) -> SearchRequest:
    """
    Create the request for a nearby search around `coordinate`.

    `location`, `radius` and `key` are always present. A non-empty
    `included_types` adds a `type` parameter with the names comma-joined in the
    given order; otherwise the parameter is left out entirely.
    """
    if isinstance(radius_m, bool) or not isinstance(radius_m, int) or radius_m <= 0:
        raise ValueError(f"radius_m must be a positive integer, got {radius_m!r}")
    if not api_key:
        raise ValueError("A Places API key is required (set GOOGLE_PLACES_API_KEY)")
    return SearchRequest(
        coordinate=coordinate,
        radius_m=radius_m,
        api_key=api_key,
        base_url=base_url.rstrip("?"),
        included_types=_normalize_types(included_types),
    )
