"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_dashboard.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_dashboard.api.v1 import cad, eligibility, ratios, sources
from credit_dashboard.infrastructure.observability.logging import setup_logging
from credit_dashboard.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Assessment Dashboard",
        description="Financial ratio analysis, loan eligibility scoring and CAD assessment",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        logging.error(
            f"Unexpected error: {exc}",
            extra={"request_id": getattr(request.state, "request_id", "unknown")},
        )
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(ratios.router, prefix="/v1", tags=["ratios"])
    app.include_router(eligibility.router, prefix="/v1", tags=["eligibility"])
    app.include_router(cad.router, prefix="/v1", tags=["cad"])
    app.include_router(sources.router, prefix="/v1", tags=["sources"])

    return app


app = create_app()
