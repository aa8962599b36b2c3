from __future__ import annotations

from fastapi import APIRouter

from weathercheck.api.deps import Controller
from weathercheck.clients.geolocation import ReportedPositionGeolocator
from weathercheck.schemas.weather import LocateRequest, StateView

router = APIRouter(prefix="/weather")


@router.get("/state", response_model=StateView)
async def get_state(controller: Controller) -> StateView:
    return StateView.from_state(controller.state)


@router.post("/locate", response_model=StateView)
async def locate(payload: LocateRequest, controller: Controller) -> StateView:
    geolocator = ReportedPositionGeolocator(
        latitude=payload.latitude,
        longitude=payload.longitude,
        error=payload.error,
    )
    await controller.locate(geolocator)
    state = await controller.settled()
    return StateView.from_state(state)
