from __future__ import annotations

from typing import Any, Protocol

from weathercheck.models.state import Coordinates


class ForecastProvider(Protocol):
    async def fetch_hourly_forecast(self, coordinates: Coordinates) -> dict[str, Any]: ...


class PlaceProvider(Protocol):
    async def reverse_geocode(self, coordinates: Coordinates) -> dict[str, Any]: ...
