# src/confighub/main.py
"""Main entry point for the ConfigHub application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from confighub import __version__
from confighub.api.v1 import (
    admin_router,
    comments_router,
    configs_router,
    games_router,
    users_router,
    votes_router,
)
from confighub.core.errors import ConfigHubError
from confighub.core.settings import settings
from confighub.schemas.common import ErrorResponse

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Community directory of game emulator configurations",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)


@app.exception_handler(ConfigHubError)
async def confighub_error_handler(request: Request, exc: ConfigHubError) -> JSONResponse:
    """Render domain errors as ``{"error": category, "detail": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.category, "detail": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request data")
    detail = f"{location}: {message}" if location else message
    logger.debug("Rejected request to %s: %s", request.url.path, detail)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "validation_error", "detail": detail},
    )


# Error bodies shared by every API route, documented in OpenAPI.
ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    code: {"model": ErrorResponse}
    for code in (400, 401, 403, 404, 409, 500)
}

# Include API routers
app.include_router(configs_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(votes_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(comments_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(games_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(users_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(admin_router, prefix="/api/v1", responses=ERROR_RESPONSES)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "description": "Community directory of game emulator configurations",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("confighub.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
