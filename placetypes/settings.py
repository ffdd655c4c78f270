import os

# Basic settings helper to read environment configuration.

DEFAULT_NEARBY_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"


def _as_int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    return int(val)


def _as_float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    return float(val)


class Settings:
    def __init__(self) -> None:
        # https://developers.google.com/maps/documentation/places/web-service/get-api-key
        self.GOOGLE_PLACES_API_KEY: str = os.getenv("GOOGLE_PLACES_API_KEY", "")
        self.PLACES_NEARBY_URL: str = os.getenv("PLACES_NEARBY_URL") or DEFAULT_NEARBY_URL
        # in meters, don't go too crazy as there are quota limits
        self.PLACES_SEARCH_RADIUS_M: int = _as_int(os.getenv("PLACES_SEARCH_RADIUS_M"), 100)
        self.PLACES_TIMEOUT_SEC: float = _as_float(os.getenv("PLACES_TIMEOUT_SEC"), 10.0)
        # "lat,lon" used by the fixed device location provider
        self.DEVICE_LOCATION: str | None = os.getenv("DEVICE_LOCATION") or None


settings = Settings()
