"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finbot_forecast.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finbot_forecast.api.v1 import forecasts, scenarios
from finbot_forecast.infrastructure.database.session import init_db
from finbot_forecast.infrastructure.observability.logging import setup_logging
from finbot_forecast.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.store_backend == "sql":
        init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Finbot Forecast",
        description="What-if scenario analysis and cash flow projection service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers; forecast history lives in the tracker when the store is remote
    app.include_router(scenarios.router, prefix="/v1", tags=["scenarios"])
    if settings.store_backend == "sql":
        app.include_router(forecasts.router, prefix="/v1", tags=["forecasts"])

    return app


app = create_app()
