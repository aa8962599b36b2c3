from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from weathercheck.models.events import (
    Failed,
    ForecastResolved,
    LocationResolved,
    PlaceResolved,
    RequestStarted,
)
from weathercheck.models.state import UNKNOWN_LOCATION, AppState, Coordinates, Place, Status

HOURS_TODAY = 24


def reduce_state(state: AppState, event: object) -> AppState:
    """
    Apply one event to the state and return the new state.

    Pure: never performs I/O and never mutates `state`. Events of an
    unknown type return `state` itself.
    """

    if isinstance(event, RequestStarted):
        return replace(state, status=Status.LOADING, error="")

    if isinstance(event, LocationResolved):
        return replace(
            state,
            coordinates=Coordinates(
                latitude=float(event.latitude), longitude=float(event.longitude)
            ),
        )

    if isinstance(event, ForecastResolved):
        hourly = _mapping_or_empty(event.response.get("hourly"))
        return replace(
            state,
            status=Status.READY,
            error="",
            forecast=event.response,
            hours_today=_first_hours(hourly, "time"),
            temperatures_today=_first_hours(hourly, "temperature_2m"),
            precipitation_probabilities=_first_hours(hourly, "precipitation_probability"),
        )

    if isinstance(event, PlaceResolved):
        return replace(state, place=place_from_response(event.response))

    if isinstance(event, Failed):
        return replace(state, status=Status.FAILED, error=event.message)

    return state


def place_from_response(response: Mapping[str, Any]) -> Place:
    country = response.get("countryName")
    city = response.get("city") or response.get("locality") or UNKNOWN_LOCATION
    return Place(
        city=str(city),
        country=str(country) if country else "",
    )


def _mapping_or_empty(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    return {}


def _first_hours(hourly: Mapping[str, Any], key: str) -> tuple[Any, ...]:
    series = hourly.get(key)
    if not isinstance(series, list):
        return ()
    return tuple(series[:HOURS_TODAY])
