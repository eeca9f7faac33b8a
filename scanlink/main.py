"""Main application module.

This module builds the FastAPI application, includes routes,
and configures middleware, exception handlers and the storage
lifecycle.
"""

import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scanlink.api import api_router
from scanlink.core.config import settings
from scanlink.core.logging import setup_logging
from scanlink.core.scan_logger import setup_scan_logging
from scanlink.middleware.logging import LoggingMiddleware
from scanlink.services.redirect import RedirectService
from scanlink.storage.base import Storage
from scanlink.storage.exceptions import StorageError
from scanlink.storage.factory import StorageFactory

logger = setup_logging()


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, **extra},
    )


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    """
    Build the application around a storage backend.

    Args:
        storage: Backend to use; when omitted one is created from settings
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.state.storage = storage or StorageFactory.create()
    app.state.redirect_service = RedirectService(app.state.storage)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.REQUEST_LOGGING_ENABLED:
        app.add_middleware(LoggingMiddleware)

    app.include_router(api_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are client errors like any other."""
        logger.warning(f"Request validation error: {exc.errors()}")
        return error_response(400, "Invalid request body")

    @app.exception_handler(StorageError)
    async def storage_exception_handler(request: Request, exc: StorageError):
        logger.error(f"Storage error in {request.method} {request.url.path}: {exc}")
        return error_response(500, "Internal server error")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler to catch and log all unhandled exceptions."""
        error_id = f"error-{time.time()}"

        logger.opt(exception=exc).bind(
            error_id=error_id,
            url=str(request.url),
            method=request.method,
            path_params=request.path_params,
            client_host=request.client.host if request.client else None,
        ).error(f"Unhandled exception in {request.method} {request.url.path}")

        return error_response(
            500,
            str(exc) if settings.DEBUG else "Internal server error",
            error_id=error_id,
        )

    @app.on_event("startup")
    async def startup_event():
        """Run startup tasks."""
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Debug mode: {settings.DEBUG}")

        if settings.SCAN_LOG_ENABLED:
            setup_scan_logging()
            logger.info("Scan access logging initialized")

        await app.state.storage.initialize()

    @app.on_event("shutdown")
    async def shutdown_event():
        """Run cleanup tasks."""
        logger.info(f"Shutting down {settings.APP_NAME}")

        pending = app.state.redirect_service.pending_scans
        if pending:
            logger.info(f"Waiting for {pending} pending scan writes")
        await app.state.redirect_service.drain()

        await app.state.storage.close()

    return app


app = create_app()
