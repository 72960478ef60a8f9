from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.trustedhost import TrustedHostMiddleware

from garden.api.deps import get_measurement_repository
from garden.api.router import api_router
from garden.core.config import Settings, load_settings
from garden.core.logging import configure_logging
from garden.repositories.base import MeasurementRepository
from garden.repositories.memory import InMemoryMeasurementRepository
from garden.schemas.measurements import HealthStatus, ServiceInfo
from garden.services.measurements import MeasurementService

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.seed_demo_data:
            MeasurementService(app.state.measurement_repository).seed()
        logger.info(f"Garden measurements service started (env={settings.env})")
        yield
        logger.info("Garden measurements service stopped")

    docs_enabled = settings.docs_enabled and not settings.is_production
    app = FastAPI(
        title="Garden Measurements API",
        version="0.1.0",
        debug=settings.debug,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.measurement_repository = InMemoryMeasurementRepository()

    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["Location"],
    )
    if settings.trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if settings.is_production:
            response.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return response

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Something broke!"},
        )

    @app.get("/", tags=["meta"], response_model=ServiceInfo)
    def root() -> ServiceInfo:
        return ServiceInfo(
            name="garden-measurements",
            status="ok",
            routes=[
                "POST /measurements",
                "GET /measurements/{timestamp}",
                "PUT /measurements/{timestamp}",
                "PATCH /measurements/{timestamp}",
                "DELETE /measurements/{timestamp}",
                "GET /stats?metric=...&stat=min|max|average&fromDateTime=...&toDateTime=...",
            ],
        )

    @app.get("/health", tags=["meta"], response_model=HealthStatus)
    def health(
        repo: Annotated[MeasurementRepository, Depends(get_measurement_repository)],
    ) -> HealthStatus:
        return HealthStatus(status="ok", measurements=repo.count())

    app.include_router(api_router)
    return app
