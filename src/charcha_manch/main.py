"""Main entry point for the Charcha Manch application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from charcha_manch.api.v1 import (
    auth_router,
    categories_router,
    comments_router,
    constituencies_router,
    posts_router,
    users_router,
)
from charcha_manch.core.errors import CharchaError, InvalidInputError
from charcha_manch.core.log_config import configure_logging
from charcha_manch.core.settings import settings

configure_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Charcha Manch API",
    description="Constituency surveys and civic discussion API",
    version=settings.app_version,
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

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(constituencies_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(categories_router, prefix="/api/v1")


@app.exception_handler(CharchaError)
async def handle_domain_error(request: Request, exc: CharchaError) -> JSONResponse:
    """Render a domain error as ``{"error": kind, "detail": message}``."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report schema violations as invalid input, naming the offending fields."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=InvalidInputError.status_code,
        content={"error": InvalidInputError.kind, "detail": "; ".join(problems)},
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Hide internal failures behind a stable error kind."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    detail = str(exc) if settings.debug and not settings.is_production else "Internal server error"
    return JSONResponse(status_code=500, content={"error": "internal", "detail": detail})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Charcha Manch API",
        "version": settings.app_version,
        "description": "Constituency surveys and civic discussion API",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("charcha_manch.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
