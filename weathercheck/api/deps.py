from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, Request

from weathercheck.clients.base import ForecastProvider, PlaceProvider
from weathercheck.core.config import Settings
from weathercheck.services.controller import ViewStateController
from weathercheck.services.sessions import ControllerRegistry

SESSION_ID_KEY = "sid"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_forecast_client(request: Request) -> ForecastProvider:
    return request.app.state.forecast_client


def get_place_client(request: Request) -> PlaceProvider:
    return request.app.state.place_client


def get_controller_registry(request: Request) -> ControllerRegistry:
    return request.app.state.controller_registry


def get_session_id(request: Request) -> str:
    session_id = request.session.get(SESSION_ID_KEY)
    if not isinstance(session_id, str) or not session_id:
        session_id = secrets.token_urlsafe(16)
        request.session[SESSION_ID_KEY] = session_id
    return session_id


async def get_controller(
    session_id: Annotated[str, Depends(get_session_id)],
    registry: Annotated[ControllerRegistry, Depends(get_controller_registry)],
    forecast: Annotated[ForecastProvider, Depends(get_forecast_client)],
    place: Annotated[PlaceProvider, Depends(get_place_client)],
) -> ViewStateController:
    return registry.get_or_create(
        session_id,
        lambda: ViewStateController(forecast_client=forecast, place_client=place),
    )


Controller = Annotated[ViewStateController, Depends(get_controller)]
