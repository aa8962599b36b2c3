from __future__ import annotations

import asyncio

import pytest

from weathercheck.core.exceptions import LocationDenied, LocationUnsupported
from weathercheck.models.events import LocationResolved
from weathercheck.models.state import Coordinates, Status
from weathercheck.services.controller import ViewStateController
from tests.fakes import FakeForecastClient, FakeGeolocator, FakePlaceClient, hourly_payload

pytestmark = pytest.mark.asyncio

LONDON = Coordinates(51.5, -0.12)
OSLO = Coordinates(59.9139, 10.7522)


def _controller(
    forecast: FakeForecastClient | None = None, place: FakePlaceClient | None = None
) -> ViewStateController:
    return ViewStateController(
        forecast_client=forecast or FakeForecastClient(),
        place_client=place or FakePlaceClient(),
    )


async def test_locate_fetches_forecast_and_place() -> None:
    forecast = FakeForecastClient(
        payload={
            "hourly": {
                "time": ["2024-01-01T00:00", "2024-01-01T01:00"],
                "temperature_2m": [10, 11],
                "precipitation_probability": [5, 6],
            }
        }
    )
    place = FakePlaceClient()
    controller = _controller(forecast, place)

    state = await controller.locate(FakeGeolocator(coordinates=LONDON))
    assert state.status is Status.LOADING
    assert state.coordinates == LONDON

    state = await controller.settled()
    assert state.status is Status.READY
    assert state.hours_today == ("2024-01-01T00:00", "2024-01-01T01:00")
    assert state.temperatures_today == (10, 11)
    assert state.precipitation_probabilities == (5, 6)
    assert state.place.city == "London"
    assert state.place.country == "United Kingdom"
    assert forecast.calls == [LONDON]
    assert place.calls == [LONDON]


async def test_location_denied() -> None:
    forecast = FakeForecastClient()
    controller = _controller(forecast)

    state = await controller.locate(FakeGeolocator(error=LocationDenied()))
    assert state.status is Status.FAILED
    assert state.error == "Unable to retrieve your location. Please allow access."
    assert state.coordinates is None

    await controller.settled()
    assert forecast.calls == []


async def test_location_unsupported() -> None:
    controller = _controller()
    state = await controller.locate(FakeGeolocator(error=LocationUnsupported()))
    assert state.status is Status.FAILED
    assert state.error == "Geolocation not supported by your browser"


async def test_zero_coordinates_do_not_fetch() -> None:
    forecast = FakeForecastClient()
    controller = _controller(forecast)

    state = await controller.locate(FakeGeolocator(coordinates=Coordinates(0.0, 10.0)))
    await controller.settled()
    assert state.status is Status.FAILED
    assert state.coordinates is None
    assert forecast.calls == []


async def test_forecast_failure_sets_failed_but_place_still_lands() -> None:
    controller = _controller(FakeForecastClient(fail=True))
    await controller.locate(FakeGeolocator(coordinates=LONDON))
    state = await controller.settled()

    assert state.status is Status.FAILED
    assert state.error == "Failed to fetch weather data"
    assert state.place.city == "London"


async def test_place_failure_is_not_user_visible() -> None:
    controller = _controller(place=FakePlaceClient(fail=True))
    await controller.locate(FakeGeolocator(coordinates=LONDON))
    state = await controller.settled()

    assert state.status is Status.READY
    assert state.error == ""
    assert state.place.city == ""
    assert len(state.hours_today) == 24


async def test_retry_after_failure_clears_error() -> None:
    forecast = FakeForecastClient(fail=True)
    controller = _controller(forecast)
    await controller.locate(FakeGeolocator(coordinates=LONDON))
    assert (await controller.settled()).status is Status.FAILED

    forecast.fail = False
    state = await controller.locate(FakeGeolocator(coordinates=LONDON))
    assert state.status is Status.LOADING
    assert state.error == ""

    state = await controller.settled()
    assert state.status is Status.READY
    assert state.error == ""
    assert forecast.calls == [LONDON, LONDON]


async def test_newer_location_supersedes_in_flight_fetch() -> None:
    london_gate = asyncio.Event()
    forecast = FakeForecastClient(
        by_coordinates={
            LONDON: hourly_payload(24, start_temp=10.0),
            OSLO: hourly_payload(24, start_temp=-5.0),
        },
        gates={LONDON: london_gate},
    )
    controller = _controller(forecast)

    await controller.locate(FakeGeolocator(coordinates=LONDON))
    await asyncio.sleep(0)
    first_generation = controller.generation

    await controller.locate(FakeGeolocator(coordinates=OSLO))
    assert controller.generation > first_generation

    london_gate.set()
    state = await controller.settled()

    assert state.coordinates == OSLO
    assert state.status is Status.READY
    assert state.temperatures_today[0] == -5.0


async def test_close_cancels_fetches() -> None:
    gate = asyncio.Event()
    forecast = FakeForecastClient(gates={LONDON: gate})
    controller = _controller(forecast)

    controller.dispatch(LocationResolved(latitude=LONDON.latitude, longitude=LONDON.longitude))
    await asyncio.sleep(0)
    controller.close()
    gate.set()

    state = await controller.settled()
    assert state.hours_today == ()


async def test_failed_retry_is_not_overwritten_by_earlier_fetch() -> None:
    gate = asyncio.Event()
    forecast = FakeForecastClient(gates={LONDON: gate})
    controller = _controller(forecast)

    await controller.locate(FakeGeolocator(coordinates=LONDON))
    await asyncio.sleep(0)

    state = await controller.locate(FakeGeolocator(error=LocationDenied()))
    assert state.status is Status.FAILED

    gate.set()
    state = await controller.settled()
    assert state.status is Status.FAILED
    assert state.error == "Unable to retrieve your location. Please allow access."
    assert state.hours_today == ()
