"""
Find the category labels of places near a coordinate, ranked by frequency.

This is the single externally meaningful operation of the package: console,
menu and device-sensor code are callers of NearbyTypesFinder.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from placetypes.domain.errors import EmptyResultError, ProviderError
from placetypes.domain.models import Coordinate, NearbyTypesResult, SearchOutcome
from placetypes.services.places_client import PlacesClient, get_default_places_client
from placetypes.services.search_request import build_search_request
from placetypes.services.type_frequency import aggregate_place_types
from placetypes.settings import settings


class NearbyTypesFinder:
    def __init__(
        self,
        client: Optional[PlacesClient] = None,
        api_key: Optional[str] = None,
        radius_m: Optional[int] = None,
        base_url: Optional[str] = None,
    ):
        self.client = client or get_default_places_client()
        self.api_key = api_key if api_key is not None else settings.GOOGLE_PLACES_API_KEY
        self.radius_m = radius_m if radius_m is not None else settings.PLACES_SEARCH_RADIUS_M
        self.base_url = base_url or settings.PLACES_NEARBY_URL
        self.logger = logging.getLogger(__name__)

    def find_nearby_place_types(
        self,
        coordinate: Coordinate,
        included_types: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
    ) -> NearbyTypesResult:
        """
        Search around `coordinate` and rank the place types found.

        A non-"OK" provider status or a result set without any labels comes back
        as a NearbyTypesResult with outcome PROVIDER_STATUS or NO_TYPES. Network,
        timeout and malformed-payload errors propagate to the caller.
        """
        if limit is not None and limit <= 0:
            raise ValueError(f"limit must be positive, got {limit!r}")
        request = build_search_request(
            coordinate,
            radius_m=self.radius_m,
            api_key=self.api_key,
            included_types=included_types,
            base_url=self.base_url,
        )
        response = self.client.fetch(request)
        try:
            response.raise_for_status()
        except ProviderError as exc:
            self.logger.debug("No usable results: provider status %s", exc.status)
            return NearbyTypesResult(
                outcome=SearchOutcome.PROVIDER_STATUS, status=exc.status, error=exc
            )

        try:
            ranked = aggregate_place_types(response.results, limit=limit)
        except EmptyResultError as exc:
            self.logger.debug("No place types in %d results", len(response.results))
            return NearbyTypesResult(
                outcome=SearchOutcome.NO_TYPES, status=response.status, error=exc
            )

        self.logger.debug(
            "Found %d place types across %d results near %s",
            len(ranked),
            len(response.results),
            coordinate.location_param,
        )
        return NearbyTypesResult(outcome=SearchOutcome.OK, types=ranked, status=response.status)


_default_finder: Optional[NearbyTypesFinder] = None


def get_default_finder() -> NearbyTypesFinder:
    global _default_finder
    if _default_finder is None:
        _default_finder = NearbyTypesFinder()
    return _default_finder


def find_nearby_place_types(
    coordinate: Coordinate,
    included_types: Optional[Iterable[str]] = None,
    limit: Optional[int] = None,
) -> NearbyTypesResult:
    return get_default_finder().find_nearby_place_types(coordinate, included_types, limit=limit)
