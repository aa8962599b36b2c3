from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from weathercheck.models.state import AppState, Status
from weathercheck.services.presentation import current_temperature, date_label, hourly_rows


class LocateRequest(BaseModel):
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    error: str | None = Field(default=None, max_length=32)

    @model_validator(mode="after")
    def _pair(self) -> "LocateRequest":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self


class CoordinatesView(BaseModel):
    latitude: float
    longitude: float


class PlaceView(BaseModel):
    city: str = ""
    country: str = ""


class HourlyView(BaseModel):
    time: str
    label: str
    temperature: float | None = None
    precipitation_probability: float | None = None


class StateView(BaseModel):
    status: Status
    error: str = ""
    coordinates: CoordinatesView | None = None
    place: PlaceView = Field(default_factory=PlaceView)
    current_temperature: float | None = None
    date: str = ""
    hourly: list[HourlyView] = Field(default_factory=list)

    @classmethod
    def from_state(cls, state: AppState) -> "StateView":
        coordinates = None
        if state.coordinates is not None:
            coordinates = CoordinatesView(
                latitude=state.coordinates.latitude,
                longitude=state.coordinates.longitude,
            )
        return cls(
            status=state.status,
            error=state.error,
            coordinates=coordinates,
            place=PlaceView(city=state.place.city, country=state.place.country),
            current_temperature=current_temperature(state),
            date=date_label(state),
            hourly=[HourlyView.model_validate(row.__dict__) for row in hourly_rows(state)],
        )
