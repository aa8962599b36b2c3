from __future__ import annotations

from weathercheck.services.controller import ViewStateController
from weathercheck.services.sessions import ControllerRegistry
from tests.fakes import FakeForecastClient, FakePlaceClient


def _factory() -> ViewStateController:
    return ViewStateController(
        forecast_client=FakeForecastClient(), place_client=FakePlaceClient()
    )


def test_same_session_gets_same_controller() -> None:
    registry = ControllerRegistry(max_sessions=4)
    first = registry.get_or_create("a", _factory)
    assert registry.get_or_create("a", _factory) is first
    assert registry.get_or_create("b", _factory) is not first
    assert len(registry) == 2


def test_least_recently_used_session_is_evicted() -> None:
    registry = ControllerRegistry(max_sessions=2)
    a = registry.get_or_create("a", _factory)
    registry.get_or_create("b", _factory)
    registry.get_or_create("a", _factory)
    registry.get_or_create("c", _factory)

    assert "a" in registry
    assert "b" not in registry
    assert "c" in registry
    assert registry.get_or_create("a", _factory) is a


def test_discard_and_close() -> None:
    registry = ControllerRegistry(max_sessions=2)
    registry.get_or_create("a", _factory)
    registry.discard("a")
    registry.discard("missing")
    assert len(registry) == 0

    registry.get_or_create("b", _factory)
    registry.close()
    assert len(registry) == 0
