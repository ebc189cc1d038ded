from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.routing import APIRoute
from starlette.middleware.trustedhost import TrustedHostMiddleware

from fleetsy.api.errors import register_exception_handlers
from fleetsy.api.router import api_router
from fleetsy.core.config import Settings, load_settings
from fleetsy.core.logging import configure_logging
from fleetsy.repositories.base import DeviceRosterSource
from fleetsy.repositories.roster import CsvDeviceRoster
from fleetsy.services.registry import DeviceRegistry
from fleetsy.services.telemetry import TelemetryStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, roster: DeviceRosterSource | None = None
) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    roster = roster or CsvDeviceRoster(
        path=settings.devices_file, has_header=settings.devices_file_has_header
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        registry = DeviceRegistry(roster.load_device_ids())
        app.state.telemetry_store = TelemetryStore(registry)
        logger.info("telemetry store ready for %d devices", len(registry))

        logger.debug("registered routes")
        for route in app.routes:
            if isinstance(route, APIRoute):
                for method in sorted(route.methods):
                    logger.debug("%s %s", method, route.path)
        yield

    docs_enabled = settings.docs_enabled and not settings.is_production
    app = FastAPI(
        title="Fleetsy Telemetry API",
        version="0.1.0",
        debug=settings.debug,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        )
    if settings.trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    access_log = logging.getLogger("fleetsy.access")

    @app.middleware("http")
    async def log_requests(request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_log.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    register_exception_handlers(app)

    @app.get("/ping", tags=["meta"], response_class=PlainTextResponse)
    def ping() -> str:
        return "pong"

    app.include_router(api_router)
    return app
