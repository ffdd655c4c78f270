"""
Device location providers.

Reading a location sensor is host-specific, so the package only defines the
blocking contract callers rely on: `get_current_location()` returns a
Coordinate or raises a LocationUnavailableError subclass.
"""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Optional, Protocol, Tuple

from placetypes.domain.errors import InvalidCoordinate, PlacesError
from placetypes.domain.models import Coordinate
from placetypes.services.coordinates import parse_location_pair

logger = logging.getLogger(__name__)


class LocationUnavailableError(PlacesError):
    """The device could not supply a location fix."""


class NoFixError(LocationUnavailableError):
    pass


class PermissionDeniedError(LocationUnavailableError):
    pass


class LocationDisabledError(LocationUnavailableError):
    pass


class SensorPermission(str, Enum):
    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"


class SensorStatus(str, Enum):
    READY = "ready"
    INITIALIZING = "initializing"
    NO_DATA = "no_data"
    DISABLED = "disabled"


class LocationSensor(Protocol):
    permission: SensorPermission
    status: SensorStatus
    position: Optional[Tuple[float, float]]

    def start(self) -> None: ...


class LocationProvider:
    def get_current_location(self) -> Coordinate:
        raise NotImplementedError


class FixedLocationProvider(LocationProvider):
    """Returns a configured coordinate, e.g. from the DEVICE_LOCATION setting."""

    def __init__(self, location: Optional[Coordinate | str]):
        self.location = location

    def get_current_location(self) -> Coordinate:
        if self.location is None:
            raise NoFixError("No device location configured (set DEVICE_LOCATION=lat,lon)")
        if isinstance(self.location, Coordinate):
            return self.location
        try:
            return parse_location_pair(self.location)
        except InvalidCoordinate as exc:
            raise NoFixError(f"Configured device location is invalid: {exc}") from exc


class PolledLocationProvider(LocationProvider):
    """
    Starts a sensor and polls it until it is ready or `wait_seconds` elapse.

    Permission is checked before status, so a denied sensor reports
    PermissionDeniedError even while still initializing.
    """

    def __init__(
        self,
        sensor: LocationSensor,
        wait_seconds: float = 5.0,
        poll_interval: float = 0.25,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.sensor = sensor
        self.wait_seconds = wait_seconds
        self.poll_interval = poll_interval
        self._sleep = sleep
        self._clock = clock

    def _wait_until_ready(self) -> None:
        deadline = self._clock() + self.wait_seconds
        while self.sensor.status != SensorStatus.READY and self._clock() < deadline:
            self._sleep(self.poll_interval)

    def get_current_location(self) -> Coordinate:
        logger.debug("Waiting up to %.1fs for the location sensor to start", self.wait_seconds)
        self.sensor.start()
        self._wait_until_ready()

        if self.sensor.permission != SensorPermission.GRANTED:
            raise PermissionDeniedError("Geolocation permission has not been granted.")

        status = self.sensor.status
        if status == SensorStatus.DISABLED:
            raise LocationDisabledError("Geolocation is disabled.")
        if status == SensorStatus.INITIALIZING:
            raise NoFixError("Could not start the geolocator in time.")
        if status == SensorStatus.NO_DATA:
            raise NoFixError("No location data available.")
        if status != SensorStatus.READY:
            raise NoFixError(f"The value of {status} was not expected as a status.")

        position = self.sensor.position
        if position is None:
            raise NoFixError("Could not get the device's current location.")
        lat, lon = position
        try:
            return Coordinate(lat, lon)
        except InvalidCoordinate as exc:
            raise NoFixError(f"Sensor reported an invalid position: {exc}") from exc
