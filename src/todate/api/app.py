"""
FastAPI application factory for the timeline engine.

This module initializes the FastAPI application instance. It is responsible for:
1.  **Middleware Setup**: CORS so a browser front end can call the engine.
2.  **Exception Handling**: Global handlers so every error comes back as JSON.
3.  **Routing**: Mounting the timeline router and the health check.

The API is stateless. Clients own their todates and span accumulators and send
them with each request.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todate import __version__
from todate.api.routers import timeline
from todate.core.settings import current_settings, get_logger

logger = get_logger("todate.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup/shutdown with the effective configuration."""
    cfg = current_settings()
    logger.info(
        "Starting Todate API (env=%s, tz=%s, locale=%s)",
        cfg.environment,
        cfg.timezone,
        cfg.locale,
    )
    yield
    logger.info("Shutting down Todate API")


def create_app() -> FastAPI:
    """
    Construct and configure the Todate FastAPI application.

    The interactive docs are only mounted outside production.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    cfg = current_settings()
    app = FastAPI(
        title="Todate API",
        description="Flexible-precision dates, lanes, ticks and span control",
        version=__version__,
        docs_url=None if cfg.is_prod else "/docs",
        redoc_url=None if cfg.is_prod else "/redoc",
        lifespan=lifespan,
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Global Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Return unhandled exceptions as structured JSON instead of HTML."""
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Map Python ValueErrors to HTTP 400 Bad Request."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": str(exc),
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(timeline.router)

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness check."""
        return {
            "status": "ok",
            "environment": current_settings().environment,
            "version": __version__,
        }

    return app


__all__ = ["create_app"]
