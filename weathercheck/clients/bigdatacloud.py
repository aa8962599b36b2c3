from __future__ import annotations

from typing import Any

import httpx

from weathercheck.core.exceptions import PlaceFetchFailed
from weathercheck.models.state import Coordinates

BIGDATACLOUD_REVERSE_GEOCODE_URL = "https://api.bigdatacloud.net/data/reverse-geocode-client"


class ReverseGeocodeClient:
    def __init__(
        self,
        *,
        user_agent: str,
        timeout_seconds: float,
        base_url: str = BIGDATACLOUD_REVERSE_GEOCODE_URL,
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

    async def reverse_geocode(self, coordinates: Coordinates) -> dict[str, Any]:
        try:
            resp = await self._client.get(
                self._base_url,
                params={
                    "latitude": coordinates.latitude,
                    "longitude": coordinates.longitude,
                },
            )
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise PlaceFetchFailed() from e

        if not isinstance(payload, dict):
            raise PlaceFetchFailed("Unexpected reverse geocode response shape")
        return payload
