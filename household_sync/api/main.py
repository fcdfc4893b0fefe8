"""
FastAPI application for Household Sync.

Entry point for the HTTP API:
- /calendar: operations invoked by the household app on behalf of a user
- /triggers: record mutations delivered by the document store
- /health: liveness and configuration status
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from household_sync import __version__
from household_sync.api.calendar_routes import router as calendar_router
from household_sync.api.middleware import RequestLoggingMiddleware
from household_sync.api.models import HealthResponse
from household_sync.api.trigger_routes import router as trigger_router
from household_sync.config import get_settings
from household_sync.database import init_db
from household_sync.errors import InvalidArgumentError, SyncError, UnauthenticatedError

logger = logging.getLogger(__name__)


# =============================================================================
# Application Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Starting Household Sync API")
    if settings.is_development:
        await init_db()
    if not settings.uses_google_oauth:
        logger.warning("Google OAuth client is not configured; calendar auth will fail")
    logger.info("Household Sync API started")

    yield

    logger.info("Shutting down Household Sync API")


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="Household Sync API",
    description="""
# Household Sync API

Keeps plant care tasks, projects and simple tasks in step with each user's
Google Calendar.

## Calendar operations
Require the `X-User-ID` header.

1. **POST /calendar/auth/init** - Get the Google authorization URL
2. **POST /calendar/auth/complete** - Exchange the authorization code
3. **POST/PUT/DELETE /calendar/events** - Manage events directly

## Triggers
**POST /triggers/{kind}/{phase}** - Record mutation from the document store.
Always returns 200 with the sync outcome.

## Errors
`{"code", "message"}` with status 400 (invalid-argument),
401 (unauthenticated), 412 (failed-precondition) or 500 (internal).
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(calendar_router)
app.include_router(trigger_router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(SyncError)
async def sync_error_handler(request: Request, exc: SyncError):
    """Render typed calendar errors."""
    if exc.status_code >= 500:
        logger.error(f"Calendar operation failed: {exc.message}", exc_info=exc.original_error)
    else:
        logger.info(f"Calendar operation rejected ({exc.code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Render malformed calendar requests as typed errors.

    The caller check comes first, so an anonymous request with a bad body is
    still unauthenticated. Other routes keep FastAPI's default response.
    """
    if not request.url.path.startswith(calendar_router.prefix):
        return await request_validation_exception_handler(request, exc)

    if not (request.headers.get("X-User-ID") or "").strip():
        error = UnauthenticatedError("User must be authenticated")
    else:
        error = InvalidArgumentError(_describe_validation_error(exc))
    return await sync_error_handler(request, error)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"Invalid {location}: {message}" if location else f"Invalid request: {message}"


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "code": "internal",
            "message": "An unexpected error occurred",
        },
    )


# =============================================================================
# Health
# =============================================================================


@app.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    tags=["System"],
)
async def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        oauth_configured=settings.uses_google_oauth,
    )


# =============================================================================
# Run with Uvicorn
# =============================================================================


def run_server(host: str | None = None, port: int | None = None, reload: bool | None = None):
    """Run the API server with Uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "household_sync.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=settings.api_reload if reload is None else reload,
    )


if __name__ == "__main__":
    run_server()
