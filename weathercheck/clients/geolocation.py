from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from weathercheck.core.exceptions import LocationDenied, LocationUnsupported
from weathercheck.models.state import Coordinates

UNSUPPORTED_ERROR = "unsupported"


class Geolocator(Protocol):
    async def get_current_position(self) -> Coordinates: ...


@dataclass(frozen=True)
class ReportedPositionGeolocator:
    """
    The position as reported by the browser's `navigator.geolocation`.

    The browser does the actual locating; this adapts its report (a
    coordinate pair or an error code) to the `Geolocator` protocol. A
    report with neither coordinates nor an error comes from a browser
    that never ran the geolocation script, so it counts as unsupported.
    """

    latitude: float | None = None
    longitude: float | None = None
    error: str | None = None

    async def get_current_position(self) -> Coordinates:
        if self.error:
            # denied, unavailable and timeout all read as "not allowed"
            if self.error.lower() == UNSUPPORTED_ERROR:
                raise LocationUnsupported()
            raise LocationDenied()
        if self.latitude is None or self.longitude is None:
            raise LocationUnsupported()
        return Coordinates(latitude=float(self.latitude), longitude=float(self.longitude))
