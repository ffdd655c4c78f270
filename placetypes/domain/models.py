"""
Core domain models for nearby place-type lookups.
These are framework-agnostic and can be used across all services.
"""
import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple
from urllib.parse import urlencode

from placetypes.domain.errors import InvalidCoordinate, PlacesError, ProviderError

OK_STATUS = "OK"
REDACTED = "REDACTED"


def format_degrees(value: float) -> str:
    """
    Render a coordinate component as a plain decimal string.

    Uses the shortest round-trip form of the float with '.' as the decimal
    point, no grouping separators and never an exponent, whatever the locale.
    """
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


@dataclass(frozen=True)
class Coordinate:
    """A validated WGS84 point. Invalid values raise InvalidCoordinate."""
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        _check_range("latitude", self.latitude, 90.0)
        _check_range("longitude", self.longitude, 180.0)
        # ints are accepted but stored as floats
        object.__setattr__(self, "latitude", float(self.latitude))
        object.__setattr__(self, "longitude", float(self.longitude))

    @property
    def location_param(self) -> str:
        return f"{format_degrees(self.latitude)},{format_degrees(self.longitude)}"


def _check_range(field_name: str, value: Any, bound: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidCoordinate(field_name, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidCoordinate(field_name, value, "must be a finite number")
    if value < -bound or value > bound:
        raise InvalidCoordinate(field_name, value, f"must be between {-bound:g} and {bound:g}")


@dataclass(frozen=True)
class SearchRequest:
    """A fully parameterized nearby-search request. Derived, never persisted."""
    coordinate: Coordinate
    radius_m: int
    api_key: str
    base_url: str
    included_types: Tuple[str, ...] = ()

    @property
    def params(self) -> List[Tuple[str, str]]:
        pairs = [
            ("location", self.coordinate.location_param),
            ("radius", str(self.radius_m)),
        ]
        if self.included_types:
            pairs.append(("type", ",".join(self.included_types)))
        pairs.append(("key", self.api_key))
        return pairs

    @property
    def url(self) -> str:
        return self._with_query(self.params)

    @property
    def redacted_url(self) -> str:
        """The request URL with the API key masked, safe for logs and errors."""
        pairs = [(k, REDACTED if k == "key" else v) for k, v in self.params]
        return self._with_query(pairs)

    def _with_query(self, pairs: List[Tuple[str, str]]) -> str:
        return f"{self.base_url}?{urlencode(pairs, safe=',')}"


@dataclass
class PlaceResult:
    """One element of the provider's result list; only `types` is aggregated."""
    types: Optional[List[str]] = None
    name: Optional[str] = None
    place_id: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SearchResponse:
    status: Optional[str]
    results: List[PlaceResult] = field(default_factory=list)

    @property
    def is_ok(self) -> bool:
        return self.status == OK_STATUS

    def raise_for_status(self) -> None:
        """Raise ProviderError unless the provider reported "OK"."""
        if not self.is_ok:
            raise ProviderError(self.status)


class TypeCount(NamedTuple):
    label: str
    count: int


class SearchOutcome(str, Enum):
    """How a nearby place-type lookup ended when no exception was raised."""
    OK = "ok"
    PROVIDER_STATUS = "provider_status"  # provider said ZERO_RESULTS, REQUEST_DENIED, ...
    NO_TYPES = "no_types"  # status OK but no category labels in the results


@dataclass
class NearbyTypesResult:
    outcome: SearchOutcome
    types: List[TypeCount] = field(default_factory=list)
    status: Optional[str] = None
    error: Optional[PlacesError] = None

    @property
    def has_results(self) -> bool:
        return self.outcome == SearchOutcome.OK and bool(self.types)
