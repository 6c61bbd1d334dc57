"""Bookmark API - FastAPI Application."""

import time
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookmark_api import __version__
from bookmark_api.boot import Bootloader, BootMode
from bookmark_api.config import settings
from bookmark_api.database import ping
from bookmark_api.deps import DbSession
from bookmark_api.logger import configure_logging, get_logger, log_exception
from bookmark_api.routers import auth, bookmarks, users
from bookmark_api.schemas import HealthResponse

# Initialize logging early
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Validate config and database connectivity before serving."""
    # Exits the process if config or DB connectivity is broken
    await Bootloader.validate(mode=BootMode.CRITICAL)
    logger.info("Application started", version=__version__)
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Bookmark API",
    description="Multi-tenant bookmark management with bearer-token authentication",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next: Any) -> Response:
    """Middleware to inject Request-ID and log request details."""
    request_id = request.headers.get("X-Request-ID", str(uuid4()))

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    start_time = time.perf_counter()
    try:
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        logger.info(
            "HTTP Request",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        response.headers["X-Request-ID"] = request_id
        return response
    except Exception as exc:
        duration = time.perf_counter() - start_time
        logger.exception(
            "HTTP Request Failed",
            duration_ms=round(duration * 1000, 2),
            error=str(exc),
        )
        raise


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler to ensure JSON response."""
    # Only show exception details in DEBUG mode
    if settings.debug:
        detail = str(exc)
        trace = traceback.format_exc()
    else:
        detail = "An internal server error occurred. Please try again later."
        trace = None

    return JSONResponse(
        status_code=500,
        content={
            "detail": detail,
            "trace": trace,
            "request_id": structlog.contextvars.get_contextvars().get("request_id"),
        },
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(bookmarks.router)


@app.get("/health", response_model=HealthResponse)
async def health_check(db: DbSession) -> Response:
    """Check application health. Returns 200 if the database answers, 503 otherwise."""
    checks: dict[str, bool] = {}
    try:
        await ping(db)
        checks["database"] = True
    except Exception as exc:
        log_exception(logger, exc, "Health check: database unavailable", include_traceback=False)
        checks["database"] = False

    healthy = all(checks.values())
    body = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        timestamp=datetime.now(UTC),
        checks=checks,
        version=__version__,
    )
    return JSONResponse(status_code=200 if healthy else 503, content=body.model_dump(mode="json"))
