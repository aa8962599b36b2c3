from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class RequestStarted:
    pass


@dataclass(frozen=True)
class LocationResolved:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ForecastResolved:
    response: Mapping[str, Any]


@dataclass(frozen=True)
class PlaceResolved:
    response: Mapping[str, Any]


@dataclass(frozen=True)
class Failed:
    message: str


Event = Union[RequestStarted, LocationResolved, ForecastResolved, PlaceResolved, Failed]
