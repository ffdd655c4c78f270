"""
Nearby place types: query a place-search API around a coordinate and rank the
category labels of the places it returns by how often they appear.
"""
import logging

from placetypes.domain.errors import (
    EmptyResultError,
    InvalidCoordinate,
    MalformedResponseError,
    NetworkError,
    PlacesError,
    PlacesTimeoutError,
    ProviderError,
)
from placetypes.domain.models import (
    Coordinate,
    NearbyTypesResult,
    PlaceResult,
    SearchOutcome,
    SearchRequest,
    SearchResponse,
    TypeCount,
)
from placetypes.services.nearby_types import NearbyTypesFinder, find_nearby_place_types

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Coordinate",
    "EmptyResultError",
    "InvalidCoordinate",
    "MalformedResponseError",
    "NearbyTypesFinder",
    "NearbyTypesResult",
    "NetworkError",
    "PlaceResult",
    "PlacesError",
    "PlacesTimeoutError",
    "ProviderError",
    "SearchOutcome",
    "SearchRequest",
    "SearchResponse",
    "TypeCount",
    "find_nearby_place_types",
]
