"""
Mailhub Backend - FastAPI Application

This is the main entry point for the Mailhub REST API: Gmail, Calendar,
Drive, Docs, Sheets and Forms proxied for a signed-in user, plus the
assistant endpoints.

Usage:
    uvicorn mailhub.api.main:app --host 127.0.0.1 --port 8080 --reload

    Or run directly:
    python -m mailhub.api.main
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mailhub import __version__
from mailhub.api.models import ErrorResponse, HealthCheck
from mailhub.api.routes import api_router
from mailhub.config import get_section
from mailhub.logging_config import setup_logging


setup_logging()
logger = logging.getLogger(__name__)

server_config = get_section("server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Mailhub backend...")
    yield
    logger.info("Shutting down Mailhub backend...")


# Create FastAPI application
app = FastAPI(
    title="Mailhub API",
    description="REST API over Google Workspace with assistant features",
    version=__version__,
    # /api/docs is the Google Docs listing
    docs_url="/api/swagger",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Configure CORS
allowed_origins = server_config.get(
    "allowed_origins", ["http://localhost:3000", "http://127.0.0.1:3000"]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Check Endpoint
# =============================================================================


@app.get("/api/health", response_model=HealthCheck, tags=["health"])
async def health_check():
    """
    Report service health.

    Mailhub holds no state of its own, so this only reports whether the
    assistant has credentials configured.
    """
    services = {
        "api": "healthy",
        "assistant": "configured" if os.environ.get("ANTHROPIC_API_KEY") else "unconfigured",
    }
    return HealthCheck(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(),
        services=services,
    )


# =============================================================================
# Error Handlers
# =============================================================================


def validation_message(errors: list[dict]) -> str:
    """
    Turn the first pydantic error into a short client-facing message.

    Missing or empty required fields read "<field> is required"; a bad or
    missing `action` tag reads "Invalid action".
    """
    if not errors:
        return "Invalid request"

    error = errors[0]
    error_type = error.get("type", "")
    loc = [str(part) for part in error.get("loc", ())]
    field = loc[-1] if len(loc) > 1 else ""

    if error_type.startswith("union_tag") or field == "action":
        return "Invalid action"
    if not field or error_type == "json_invalid":
        return "Invalid request body"
    empty = error_type == "string_too_short" and (error.get("ctx") or {}).get("min_length") == 1
    if error_type == "missing" or empty:
        return f"{field} is required"
    return f"{field}: {error.get('msg', 'invalid value')}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400s."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            error=validation_message(exc.errors()), code=f"HTTP_{status.HTTP_400_BAD_REQUEST}"
        ).model_dump(exclude_none=True),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.detail, code=f"HTTP_{exc.status_code}").model_dump(
            exclude_none=True
        ),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Internal server error", code="HTTP_500").model_dump(
            exclude_none=True
        ),
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(api_router)


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    host = server_config.get("host", "127.0.0.1")
    port = server_config.get("port", 8080)

    uvicorn.run("mailhub.api.main:app", host=host, port=port, reload=True, log_level="info")
