"""
Lightweight client for the Google Places Nearby Search endpoint.

Performs exactly one GET per request with a bounded timeout and maps every
transport or payload problem into the PlacesError taxonomy. Retries, if any,
belong to the caller.

Response format documentation:
https://developers.google.com/maps/documentation/places/web-service/search-nearby#PlacesNearbySearchResponse
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, List, Optional

import requests

from placetypes.domain.errors import MalformedResponseError, NetworkError, PlacesTimeoutError
from placetypes.domain.models import PlaceResult, SearchRequest, SearchResponse
from placetypes.settings import settings

CHUNK_SIZE = 8192


def _parse_place(item: Any, index: int) -> PlaceResult:
    if not isinstance(item, dict):
        raise MalformedResponseError(f"results[{index}] is not an object")
    types = item.get("types")
    if types is not None:
        if not isinstance(types, list) or not all(isinstance(t, str) for t in types):
            raise MalformedResponseError(f"results[{index}].types is not a list of strings")
    name = item.get("name")
    place_id = item.get("place_id")
    return PlaceResult(
        types=types,
        name=name if isinstance(name, str) else None,
        place_id=place_id if isinstance(place_id, str) else None,
        raw=item,
    )


def parse_search_response(payload: Any) -> SearchResponse:
    """
    Validate a decoded JSON body into a SearchResponse.

    Rules:
    - The body must be an object; `status` may be missing but must otherwise be a string.
    - `results` may be missing or null (treated as empty) but must otherwise be a list.
    - Every result must be an object whose optional `types` is a list of strings.
    Unlisted fields are ignored. A non-"OK" status is not an error here.
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(payload).__name__}")
    status = payload.get("status")
    if status is not None and not isinstance(status, str):
        raise MalformedResponseError("status is not a string")
    raw_results = payload.get("results")
    if raw_results is None:
        raw_results = []
    if not isinstance(raw_results, list):
        raise MalformedResponseError("results is not a list")
    results: List[PlaceResult] = [_parse_place(item, i) for i, item in enumerate(raw_results)]
    return SearchResponse(status=status, results=results)


class PlacesClient:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.PLACES_TIMEOUT_SEC
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")
        self._clock = clock
        self.logger = logging.getLogger(__name__)

    def _read_body(self, resp: requests.Response, deadline: float, safe_url: str) -> bytes:
        chunks = []
        for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
            chunks.append(chunk)
            if self._clock() > deadline:
                raise PlacesTimeoutError(
                    f"Place search timed out after {self.timeout:g}s", url=safe_url
                )
        return b"".join(chunks)

    def fetch(self, request: SearchRequest) -> SearchResponse:
        """
        GET the nearby-search URL once and parse the body.

        The whole exchange, body included, is bounded by `timeout`: the body is
        streamed and reading stops once the deadline has passed, so a provider
        trickling bytes cannot hold the caller.

        Raises PlacesTimeoutError, NetworkError or MalformedResponseError. A
        parsed response with a non-"OK" status is returned as-is; callers use
        SearchResponse.is_ok or raise_for_status().

        Transport exceptions are not chained: requests embeds the full URL,
        key included, in its messages.
        """
        safe_url = request.redacted_url
        self.logger.debug("PlacesClient.fetch: GET %s timeout=%.1fs", safe_url, self.timeout)
        deadline = self._clock() + self.timeout
        resp = None
        try:
            resp = self.session.get(request.url, timeout=self.timeout, stream=True)
            resp.raise_for_status()
            body = self._read_body(resp, deadline, safe_url)
        except PlacesTimeoutError:
            self.logger.warning("Places request exceeded %.1fs: %s", self.timeout, safe_url)
            raise
        except requests.Timeout:
            self.logger.warning("Places request timed out after %.1fs: %s", self.timeout, safe_url)
            raise PlacesTimeoutError(
                f"Place search timed out after {self.timeout:g}s", url=safe_url
            ) from None
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            self.logger.warning("Places request failed with HTTP %s: %s", status_code, safe_url)
            raise NetworkError(
                f"Place search failed with HTTP status {status_code}",
                url=safe_url,
                status_code=status_code,
            ) from None
        except requests.RequestException as exc:
            self.logger.warning("Places request network failure (%s): %s", type(exc).__name__, safe_url)
            raise NetworkError(
                f"Network failure during place search: {type(exc).__name__}", url=safe_url
            ) from None
        finally:
            if resp is not None:
                resp.close()

        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise MalformedResponseError("Place search response is not valid JSON", url=safe_url) from exc

        try:
            response = parse_search_response(payload)
        except MalformedResponseError as exc:
            exc.url = safe_url
            raise
        self.logger.debug(
            "PlacesClient.fetch: status=%s got %d results", response.status, len(response.results)
        )
        return response


_default_places_client: Optional[PlacesClient] = None


def get_default_places_client() -> PlacesClient:
    global _default_places_client
    if _default_places_client is None:
        _default_places_client = PlacesClient()
    return _default_places_client
