from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from weathercheck.api import deps
from weathercheck.core.config import Settings
from weathercheck.factory import create_app
from tests.fakes import FakeForecastClient, FakePlaceClient


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=True,
        docs_enabled=False,
        secret_key="test_secret_key_must_be_32_chars_minimum",
        trusted_hosts=["testserver", "localhost"],
        http_user_agent="test-agent",
        http_timeout_seconds=1.0,
        max_sessions=10,
    )


@pytest.fixture()
def forecast_client() -> FakeForecastClient:
    return FakeForecastClient()


@pytest.fixture()
def place_client() -> FakePlaceClient:
    return FakePlaceClient()


@pytest.fixture()
def client(
    settings: Settings,
    forecast_client: FakeForecastClient,
    place_client: FakePlaceClient,
) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[deps.get_forecast_client] = lambda: forecast_client
    app.dependency_overrides[deps.get_place_client] = lambda: place_client
    with TestClient(app) as client:
        yield client
