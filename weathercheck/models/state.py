from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

UNKNOWN_LOCATION = "Unknown Location"


class Status(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    @property
    def is_known(self) -> bool:
        # A zero component is the "no fix yet" sentinel.
        return self.latitude != 0 and self.longitude != 0


@dataclass(frozen=True)
class Place:
    city: str = ""
    country: str = ""


@dataclass(frozen=True)
class AppState:
    coordinates: Coordinates | None = None
    forecast: Mapping[str, Any] = field(default_factory=dict)

    hours_today: tuple[str, ...] = ()
    temperatures_today: tuple[float, ...] = ()
    precipitation_probabilities: tuple[float, ...] = ()

    place: Place = field(default_factory=Place)
    status: Status = Status.IDLE
    error: str = ""

    @property
    def is_idle(self) -> bool:
        return self.status is Status.IDLE

    @property
    def is_ready(self) -> bool:
        return self.status is Status.READY

    @property
    def is_loading(self) -> bool:
        return self.status is Status.LOADING

    @property
    def has_failed(self) -> bool:
        return self.status is Status.FAILED
