from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog

from weathercheck.clients.base import ForecastProvider, PlaceProvider
from weathercheck.clients.geolocation import Geolocator
from weathercheck.core.exceptions import (
    LocationDenied,
    LocationError,
    PlaceFetchFailed,
    WeatherFetchFailed,
)
from weathercheck.models.events import (
    Event,
    Failed,
    ForecastResolved,
    LocationResolved,
    PlaceResolved,
    RequestStarted,
)
from weathercheck.models.state import AppState, Coordinates
from weathercheck.services.reducer import reduce_state

logger = structlog.get_logger()


class ViewStateController:
    """
    Owns one `AppState` and drives it through `reduce_state`.

    Every `locate()` call and every `LocationResolved` starts a new
    request generation: fetch tasks of the previous generation are
    cancelled, and a fetch only commits its result while its generation
    is still the current one.
    Must be used from within a running event loop.
    """

    def __init__(
        self,
        *,
        forecast_client: ForecastProvider,
        place_client: PlaceProvider,
        state: AppState | None = None,
    ) -> None:
        self._forecast_client = forecast_client
        self._place_client = place_client
        self._state = state or AppState()
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def dispatch(self, event: Event) -> AppState:
        self._state = reduce_state(self._state, event)
        if isinstance(event, LocationResolved):
            self._start_fetches(self._state.coordinates)
        return self._state

    async def locate(self, geolocator: Geolocator) -> AppState:
        # Fetches of an earlier fix must not overwrite this attempt.
        self._supersede()
        self.dispatch(RequestStarted())
        try:
            coordinates = await geolocator.get_current_position()
        except LocationError as e:
            logger.info("Location unavailable", reason=type(e).__name__)
            return self.dispatch(Failed(e.message))

        if not coordinates.is_known:
            logger.info("Location fix has a zero component", coordinates=coordinates)
            return self.dispatch(Failed(LocationDenied.default_message))

        return self.dispatch(
            LocationResolved(latitude=coordinates.latitude, longitude=coordinates.longitude)
        )

    async def settled(self) -> AppState:
        """Wait until no fetch task is in flight and return the state."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        return self._state

    def close(self) -> None:
        self._supersede()

    def _supersede(self) -> None:
        self._generation += 1
        self._cancel_tasks()

    def _start_fetches(self, coordinates: Coordinates | None) -> None:
        self._supersede()
        if coordinates is None or not coordinates.is_known:
            return
        generation = self._generation
        self._spawn(self._fetch_forecast(coordinates, generation))
        self._spawn(self._fetch_place(coordinates, generation))

    async def _fetch_forecast(self, coordinates: Coordinates, generation: int) -> None:
        self._commit(generation, RequestStarted())
        try:
            payload = await self._forecast_client.fetch_hourly_forecast(coordinates)
        except WeatherFetchFailed as e:
            logger.warning("Failed to fetch weather data", coordinates=coordinates)
            self._commit(generation, Failed(e.message))
            return
        self._commit(generation, ForecastResolved(payload))

    async def _fetch_place(self, coordinates: Coordinates, generation: int) -> None:
        try:
            payload = await self._place_client.reverse_geocode(coordinates)
        except PlaceFetchFailed as e:
            logger.warning("Couldn't get city name", coordinates=coordinates, error=e.message)
            return
        self._commit(generation, PlaceResolved(payload))

    def _commit(self, generation: int, event: Event) -> None:
        if generation != self._generation:
            logger.info(
                "Dropping stale result",
                event_type=type(event).__name__,
                generation=generation,
                current=self._generation,
            )
            return
        self.dispatch(event)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(_log_task_error)

    def _cancel_tasks(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()


def _log_task_error(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Fetch task crashed", exc_info=exc)
