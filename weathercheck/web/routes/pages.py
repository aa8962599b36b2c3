from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from weathercheck.api.deps import Controller
from weathercheck.clients.geolocation import ReportedPositionGeolocator
from weathercheck.models.state import AppState
from weathercheck.schemas.weather import LocateRequest, StateView
from weathercheck.services.presentation import current_temperature, date_label, hourly_rows
from weathercheck.web.deps import csrf_protect, ensure_csrf_token
from weathercheck.web.templates import templates

router = APIRouter()


def _render_index(
    *,
    request: Request,
    state: AppState,
    form_error: str | None = None,
    status_code: int = 200,
):
    csrf_token = ensure_csrf_token(request)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "request": request,
            "title": "WeatherCheck",
            "csrf_token": csrf_token,
            "state": state,
            "current_temperature": current_temperature(state),
            "date_label": date_label(state),
            "rows": hourly_rows(state),
            "form_error": form_error,
        },
        status_code=status_code,
    )


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


@router.get("/", include_in_schema=False)
async def index(request: Request, controller: Controller):
    return _render_index(request=request, state=controller.state)


@router.post("/locate", include_in_schema=False, dependencies=[Depends(csrf_protect)])
async def locate(
    request: Request,
    controller: Controller,
    latitude: Annotated[str | None, Form(max_length=32)] = None,
    longitude: Annotated[str | None, Form(max_length=32)] = None,
    error: Annotated[str | None, Form(max_length=32)] = None,
):
    try:
        report = LocateRequest.model_validate(
            {
                "latitude": _blank_to_none(latitude),
                "longitude": _blank_to_none(longitude),
                "error": _blank_to_none(error),
            }
        )
    except ValidationError:
        return _render_index(
            request=request,
            state=controller.state,
            form_error="Invalid location report.",
            status_code=422,
        )

    await controller.locate(
        ReportedPositionGeolocator(
            latitude=report.latitude,
            longitude=report.longitude,
            error=report.error,
        )
    )
    await controller.settled()
    return RedirectResponse("/ui/", status_code=303)


@router.get("/state.json", include_in_schema=False)
async def state_json(controller: Controller) -> StateView:
    return StateView.from_state(controller.state)
