"""FastAPI application entry point.

``create_app`` wires settings, the component factory and the scan cache
onto ``app.state`` and registers the consistency routes.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from template_guard.api.cache import IntegrityScanCache
from template_guard.api.consistency import router as consistency_router
from template_guard.api.schemas import ErrorResponse
from template_guard.core.config import Settings, get_settings
from template_guard.core.factory import ComponentFactory
from template_guard.core.logging_config import setup_logging
from template_guard.db.session import close_db, create_all_tables
from template_guard.interfaces.repository import (
    ConsistencyError,
    MalformedContentDataError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables when asked to, and release the engine on shutdown."""
    settings: Settings = app.state.settings
    logger.info("Starting Template Guard API...")

    if settings.create_tables_on_startup:
        await create_all_tables(settings)

    yield

    logger.info("Shutting down Template Guard API...")
    try:
        await close_db()
    except Exception as e:
        logger.error(f"Error closing database: {e}", exc_info=True)


def _error(status_code: int, detail: str, error_code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=detail, error_code=error_code).model_dump(),
    )


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request body and query validation errors."""
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "Validation error", "errors": exc.errors()},
        )

    @app.exception_handler(ConsistencyError)
    async def consistency_exception_handler(request: Request, exc: ConsistencyError):
        """Map consistency errors that escape a route's own handling."""
        if isinstance(exc, NotFoundError):
            return _error(status.HTTP_404_NOT_FOUND, str(exc), "NOT_FOUND")
        if isinstance(exc, MalformedContentDataError):
            return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc), "MALFORMED_CONTENT_DATA")
        logger.error(f"Consistency error on {request.url.path}: {exc}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), "CONSISTENCY_ERROR")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "INTERNAL_ERROR")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Template Guard",
        description="Placeholder consistency checks for content and URL templates",
        version=VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.factory = ComponentFactory(settings)
    app.state.scan_cache = IntegrityScanCache(settings.integrity_cache_ttl_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(consistency_router)

    @app.get("/health", tags=["health"])
    async def health_check():
        """Liveness probe; does not touch the database."""
        return {
            "status": "healthy",
            "service": "template-guard-api",
            "version": VERSION,
            "integrity_cache_ttl_seconds": settings.integrity_cache_ttl_seconds,
        }

    _register_exception_handlers(app)

    logger.info(
        f"Template Guard app created: cache_ttl={settings.integrity_cache_ttl_seconds}s, "
        f"high_severity_threshold={settings.high_severity_threshold}"
    )
    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    setup_logging(settings)
    uvicorn.run(
        "template_guard.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )
