"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import check_store, run_migrations
from src.api.cors import TrustedOriginCORSMiddleware
from src.api.errors import register_exception_handlers
from src.api.models import HealthResponse
from src.api.users import router as users_router
from src.config.settings import Settings, get_settings
from src.domain.ports import StoreStatus

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "users",
        "description": "Register, list and delete users",
    },
    {
        "name": "health",
        "description": "Liveness and record store connectivity",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Opens the database connection pool and waits until it can connect
    - Runs migrations on startup
    - Closes connection pool on shutdown

    Any startup failure propagates, so the server never starts
    accepting requests against an unreachable store.
    """
    settings: Settings = app.state.settings

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,
    )

    try:
        pool.open(wait=True, timeout=settings.connect_timeout_seconds)

        logger.info("Running database migrations...")
        run_migrations(pool)
    except Exception:
        logger.error("Database connection failed, aborting startup")
        pool.close()
        raise

    # Store pool in app state for dependency injection
    app.state.pool = pool

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    pool.close()
    logger.info("Database connection pool closed")


health_router = APIRouter(tags=["health"])


@health_router.get("/", response_model=HealthResponse, summary="Health check")
def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint with database validation.

    Always returns 200; store connectivity is reported in `storeStatus`.
    """
    settings: Settings = request.app.state.settings
    pool: ConnectionPool | None = getattr(request.app.state, "pool", None)

    if pool is None:
        store_status = StoreStatus.DISCONNECTED
    else:
        store_status = check_store(pool, timeout=settings.health_check_timeout_seconds)

    return HealthResponse(
        message="Registration API is running",
        store_status=store_status.value,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Explicit settings; loaded from the environment when omitted
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="user-registry",
        description="User Registration API - Register, list and delete users",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_exception_handlers(app)
    # Added last so it wraps the catch-all error middleware
    app.add_middleware(
        TrustedOriginCORSMiddleware,
        allowed_origins=settings.cors_allowed_origins,
        trusted_suffixes=settings.cors_trusted_suffixes,
    )

    app.include_router(health_router)
    app.include_router(users_router, prefix="/api")

    return app
