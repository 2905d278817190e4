"""
OrElse - Backend API
Goals with deadlines, community-voted consequences when they are missed.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from orelse.api.v1.router import api_router
from orelse.core.config import settings
from orelse.core.database import dispose_engine, get_engine
from orelse.core.exceptions import OrElseError
from orelse.core.logging import get_logger, setup_logging
from orelse.core.rate_limit import limiter
from orelse.models import Base

# Setup structured logging
setup_logging()
logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests with timing."""

    async def dispatch(self, request: Request, call_next):
        """Log request details and timing."""
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        log_data = {
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": request.client.host if request.client else "unknown",
        }

        # Skip health check logs to reduce noise
        if request.url.path != "/health":
            if response.status_code >= 500:
                logger.error("Request failed", extra=log_data)
            elif response.status_code >= 400:
                logger.warning("Request error", extra=log_data)
            elif duration_ms > 1000:  # Log slow requests (>1s)
                logger.warning("Slow request", extra=log_data)
            else:
                logger.debug("Request completed", extra=log_data)

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.APP_NAME} (env={settings.APP_ENV}, debug={settings.DEBUG})")
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    logger.info(f"Shutting down {settings.APP_NAME}")
    await dispose_engine()


# Conditionally expose OpenAPI docs (only in development/debug mode)
app = FastAPI(
    title=settings.APP_NAME,
    description="Set a goal. Miss the deadline. Face the consequence the community voted for.",
    version="1.0.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json" if settings.DEBUG else None,
    docs_url=f"{settings.API_PREFIX}/docs" if settings.DEBUG else None,
    redoc_url=None,
    lifespan=lifespan,
)


@app.exception_handler(OrElseError)
async def orelse_error_handler(request: Request, exc: OrElseError):
    """Render expected request failures as {"error": ...}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Payload problems are 400s with one issue per field."""
    issues = [
        # Drop the leading "body"/"query"/"path" segment
        {"path": list(err.get("loc", ()))[1:], "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"error": "Invalid input.", "issues": issues}),
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(status_code=429, content={"error": f"Rate limit exceeded: {exc.detail}"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions; details go to the log only."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(status_code=500, content={"error": "An internal error occurred."})


# Rate limiting
app.state.limiter = limiter

# CORS middleware with restricted methods and headers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=settings.CORS_ALLOWED_METHODS,  # Restricted, not "*"
    allow_headers=settings.CORS_ALLOWED_HEADERS,  # Restricted, not "*"
    max_age=600,  # Cache preflight for 10 minutes
)

# Request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health_check():
    """Health check endpoint with DB connectivity."""
    status = {"app": settings.APP_NAME, "status": "healthy"}

    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        status["database"] = "ok"
    except Exception as e:
        logger.warning(f"Health check database probe failed: {e}")
        status["database"] = "error"
        status["status"] = "degraded"

    return status
