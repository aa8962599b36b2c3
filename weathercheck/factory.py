from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from weathercheck.api.router import api_router
from weathercheck.clients.bigdatacloud import ReverseGeocodeClient
from weathercheck.clients.openmeteo import OpenMeteoClient
from weathercheck.core.config import Settings, load_settings
from weathercheck.core.logging import configure_logging
from weathercheck.services.sessions import ControllerRegistry
from weathercheck.web.router import ui_router

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings
        app.state.forecast_client = OpenMeteoClient(
            user_agent=settings.http_user_agent,
            timeout_seconds=settings.http_timeout_seconds,
            base_url=str(settings.forecast_url),
        )
        app.state.place_client = ReverseGeocodeClient(
            user_agent=settings.http_user_agent,
            timeout_seconds=settings.http_timeout_seconds,
            base_url=str(settings.reverse_geocode_url),
        )
        app.state.controller_registry = ControllerRegistry(
            max_sessions=settings.max_sessions
        )
        logger.info("Started", env=settings.env)

        yield

        app.state.controller_registry.close()
        await app.state.forecast_client.aclose()
        await app.state.place_client.aclose()
        logger.info("Stopped")

    docs_enabled = settings.docs_enabled and not settings.is_production
    app = FastAPI(
        title="WeatherCheck",
        version="0.1.0",
        debug=settings.debug,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age_seconds,
        same_site="lax",
        https_only=settings.is_production,
    )
    if settings.trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        # The page needs the browser's geolocation, nothing else.
        response.headers.setdefault("Permissions-Policy", "geolocation=(self)")
        if settings.is_production:
            response.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return response

    @app.get("/", tags=["meta"])
    def root():
        return {"name": "weathercheck", "status": "ok"}

    app.include_router(api_router)
    app.include_router(ui_router)

    static_dir = Path(__file__).resolve().parent / "web" / "static"
    app.mount("/static", StaticFiles(directory=static_dir), name="static")
    return app
