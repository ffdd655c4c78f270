"""
Error taxonomy for nearby place-type lookups.

Every failure raised by the library derives from PlacesError so callers can
catch the whole family, while each subclass stays distinguishable:

- InvalidCoordinate: local input validation failed; the caller should re-prompt.
- NetworkError / PlacesTimeoutError: the provider could not be reached in time.
- MalformedResponseError: the provider answered with an unexpected payload.
- ProviderError: the provider answered but reported a non-"OK" status.
- EmptyResultError: status "OK" but no usable category labels were found.
"""
from typing import Any, Optional


class PlacesError(Exception):
    """Base class for all nearby place-type errors."""


class InvalidCoordinate(PlacesError, ValueError):
    def __init__(self, field: str, raw_value: Any, reason: str):
        self.field = field
        self.raw_value = raw_value
        self.reason = reason
        super().__init__(f"Invalid {field} {raw_value!r}: {reason}")


class NetworkError(PlacesError):
    """Transport failure: DNS, refused connection, TLS, or an HTTP error status."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class PlacesTimeoutError(PlacesError, TimeoutError):
    """The provider did not answer within the configured timeout."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class MalformedResponseError(PlacesError):
    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class ProviderError(PlacesError):
    """The provider was reachable but reported a non-success status."""

    def __init__(self, status: Optional[str]):
        self.status = status
        super().__init__(f"Place search returned status {status!r}")


class EmptyResultError(PlacesError):
    """No place in the result set carried any category label."""
