from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.astro.router import router as astro_router
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.http_logging import REQUEST_ID_HEADER, HttpLoggingMiddleware
from app.core.settings import Settings, get_settings
from app.magicball.router import router as magicball_router

setup_logging()
logger = logging.getLogger("app")


def create_app(settings: Settings | None = None) -> FastAPI:
    # Configuration is read once here; handlers get it from app.state, never from env.
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.openai_api_key:
            logger.warning("OPENAI_API_KEY is not set; relay endpoints will return errors")
        logger.info("Relay service started")
        yield

    app = FastAPI(
        title="Sanctuary Relay API",
        description=(
            "Thin relay between clients and a chat-completion provider.\n\n"
            "- `/magicball` answers a free-form question as a symbolic oracle.\n"
            "- `/astro` interprets a precomputed natal chart supplied by the caller.\n\n"
            "Every response is `{ok: true, text}` or `{ok: false, error}`. "
            "Questions, charts and readings are never logged or stored."
        ),
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime checks for load balancers and monitoring.",
            },
            {"name": "magicball", "description": "Symbolic oracle answers (no natal astrology)."},
            {"name": "astro", "description": "Natal chart interpretation from supplied placements."},
            {"name": "metrics", "description": "Prometheus-compatible metrics endpoint."},
        ],
    )
    app.state.settings = settings

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware, max_body_bytes=settings.max_body_bytes)
    # Added last so it wraps everything and preflights never reach the routes.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    register_exception_handlers(app)

    @app.get("/", include_in_schema=False)
    async def root() -> PlainTextResponse:
        return PlainTextResponse(f"{settings.service_name} is running")

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "This endpoint does not call the upstream provider."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok", service=settings.service_name)

    app.include_router(metrics_router)
    app.include_router(magicball_router)
    app.include_router(astro_router)
    return app


app = create_app()
