"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware, exception handlers and startup/shutdown tasks.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from urlshortener.api import api_router
from urlshortener.core.config import settings
from urlshortener.core.logging import setup_logging
from urlshortener.db.base import engine, init_models
from urlshortener.middleware.logging import LoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run startup tasks, then cleanup on shutdown."""
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    if settings.DB_CREATE_TABLES:
        await init_models()

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    await engine.dispose()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.REQUEST_LOGGING_ENABLED:
    app.add_middleware(LoggingMiddleware)

# Include API router
app.include_router(api_router)


def describe_validation_error(error: Dict[str, Any]) -> str:
    """Turn the first pydantic error of a request into a client-facing message."""
    error_type = error.get("type", "")
    loc = error.get("loc", ())
    field = loc[-1] if loc else "body"

    if error_type == "json_invalid":
        return "Invalid JSON body"
    if error_type == "missing":
        # No body at all means the url is missing too
        if tuple(loc) == ("body",):
            return "Missing field: url"
        return f"Missing field: {field}"
    if error_type in ("missing_url", "unsupported_url"):
        return error["msg"]
    if field == "url":
        return "Malformed or unsupported URL"
    return "Invalid request body"


# Add exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation problems as 400 with a single readable message."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    detail = describe_validation_error(first)
    logger.info(f"Request validation error on {request.url.path}: {detail}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail, "error_code": first.get("type")},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"
    error_location = f"{request.method} {request.url.path}"

    logger.opt(exception=exc).error(
        "Unhandled exception in {location}",
        location=error_location,
        error_id=error_id,
        url=str(request.url),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error occurred",
            "error_id": error_id,
            "message": str(exc) if settings.DEBUG else "Internal server error"
        }
    )
