from __future__ import annotations

from typing import Any

import httpx
import structlog

from weathercheck.core.exceptions import WeatherFetchFailed
from weathercheck.models.state import Coordinates

OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
HOURLY_VARIABLES = ("temperature_2m", "precipitation_probability")

logger = structlog.get_logger()


class OpenMeteoClient:
    def __init__(
        self,
        *,
        user_agent: str,
        timeout_seconds: float,
        base_url: str = OPEN_METEO_FORECAST_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_hourly_forecast(self, coordinates: Coordinates) -> dict[str, Any]:
        """
        Load the hourly temperature and precipitation probability series
        for a coordinate. Any transport error, non-2xx status or body that
        is not a JSON object is reported as `WeatherFetchFailed`.
        """

        try:
            resp = await self._client.get(
                self._base_url,
                params={
                    "latitude": coordinates.latitude,
                    "longitude": coordinates.longitude,
                    "hourly": ",".join(HOURLY_VARIABLES),
                },
            )
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Forecast request failed", error=str(e))
            raise WeatherFetchFailed() from e

        if not isinstance(payload, dict):
            logger.warning("Unexpected forecast response shape", type=type(payload).__name__)
            raise WeatherFetchFailed()
        return payload
