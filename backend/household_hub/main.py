"""
FastAPI application entry point for Household Hub.

Builds the app with middleware, logging and error handlers, and registers
the routers for the configured domain (kitchen or vehicle).
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from household_hub.config import Settings, settings
from household_hub.core.limiter import configure_limiter
from household_hub.core.log_config import setup_logging
from household_hub.core.readiness import ReadinessState
from household_hub.database import init_db
from household_hub.errors import HubError
from household_hub.routers import (
    departments,
    health,
    items,
    service_log,
    service_types,
    shopping_list,
    stores,
    vehicles,
)
from household_hub.services.janitor import PurchasedItemJanitor

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves as ``{"error": ..., "detail": ...}``."""

    @app.exception_handler(HubError)
    async def hub_error_handler(request: Request, exc: HubError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message} ({exc.detail})")
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "detail": _jsonable_errors(exc)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Database error", "detail": str(getattr(exc, "orig", None) or exc)},
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"error": "Rate limit exceeded. Please try again later."},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def _jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances, which JSONResponse cannot encode
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def register_routers(app: FastAPI, app_settings: Settings) -> None:
    prefix = app_settings.API_PREFIX.rstrip("/")

    app.include_router(health.router, tags=["health"])
    app.include_router(health.router, prefix=prefix, tags=["health"])

    if app_settings.APP_DOMAIN == "vehicle":
        app.include_router(vehicles.router, prefix=f"{prefix}/vehicles", tags=["vehicles"])
        app.include_router(
            service_types.router, prefix=f"{prefix}/service-types", tags=["service-types"]
        )
        app.include_router(service_log.router, prefix=f"{prefix}/service-log", tags=["service-log"])
        app.include_router(
            service_log.upcoming_router, prefix=f"{prefix}/upcoming-services", tags=["service-log"]
        )
    else:
        app.include_router(stores.router, prefix=f"{prefix}/stores", tags=["stores"])
        app.include_router(
            departments.router, prefix=f"{prefix}/departments", tags=["departments"]
        )
        app.include_router(items.router, prefix=f"{prefix}/items", tags=["items"])
        app.include_router(
            shopping_list.router, prefix=f"{prefix}/shopping-list", tags=["shopping-list"]
        )


def create_app(
    app_settings: Settings = settings,
    readiness: Optional[ReadinessState] = None,
    janitor: Optional[PurchasedItemJanitor] = None,
    initialize_database: bool = True,
) -> FastAPI:
    """
    Build the application.

    Tests pass their own readiness state and janitor, and skip schema
    creation on the configured database.
    """
    setup_logging(app_settings)
    readiness = readiness or ReadinessState()
    janitor = janitor or PurchasedItemJanitor(
        interval=timedelta(hours=app_settings.CLEANUP_INTERVAL_HOURS)
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        if initialize_database:
            logger.info("Initializing database...")
            init_db()
            logger.info("Database initialized successfully")
        readiness.mark_ready()
        logger.info(f"{app_settings.APP_NAME} ready ({app_settings.APP_DOMAIN})")

        yield

        # Shutdown
        readiness.mark_not_ready()
        logger.info("Shutting down application...")

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Kitchen and vehicle household management API",
        version=app_settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.readiness = readiness
    app.state.janitor = janitor
    app.state.settings = app_settings
    app.state.limiter = configure_limiter(app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    register_exception_handlers(app)
    register_routers(app, app_settings)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "household_hub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
