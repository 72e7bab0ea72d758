"""
Program Catalog API - FastAPI application.

Provides endpoints for:
- Public discovery of published programs (feed, search, related, filters)
- Admin CMS operations (external search, import, edit, publish, archive)
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import admin_programs, programs
from catalog_backend.cache.ephemeral import EphemeralCache
from catalog_backend.config import get_settings
from catalog_backend.errors import (
    CatalogError,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    UpstreamUnavailableError,
)
from catalog_backend.providers import build_default_registry
from catalog_backend.repositories.programs import ProgramRepositoryError
from catalog_backend.utils.env import load_env

logger = logging.getLogger(__name__)

load_env()


def get_cors_origins() -> list[str]:
    """
    Get CORS allowed origins from environment.
    Set CORS_ALLOW_ORIGINS as comma-separated list of origins.
    """
    origins_str = os.getenv("CORS_ALLOW_ORIGINS", "")
    if not origins_str:
        return []
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the process-wide cache and provider registry."""
    logger.info("Starting up Program Catalog API...")
    app.state.cache = EphemeralCache()
    app.state.provider_registry = build_default_registry(get_settings())
    yield
    logger.info("Shutting down Program Catalog API...")
    app.state.cache.clear()


app = FastAPI(
    title="Program Catalog API",
    description="Catalog of media programs imported from external content providers",
    version="0.1.0",
    lifespan=lifespan,
)

# If no origins are configured, allow all origins but disable credentials.
cors_origins = get_cors_origins()
allow_credentials = len(cors_origins) > 0

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if cors_origins else ["*"],
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


def _status_for(exc: CatalogError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, InvalidRequestError):
        return 400
    if isinstance(exc, ConflictError):
        return 409
    if isinstance(exc, UpstreamUnavailableError):
        return 503
    if isinstance(exc, ProgramRepositoryError):
        return 502
    return 500


@app.exception_handler(CatalogError)
async def catalog_error_handler(_request: Request, exc: CatalogError) -> JSONResponse:
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc}")
    if isinstance(exc, ProgramRepositoryError):
        # Don't leak internal store details to clients.
        return JSONResponse(status_code=status_code, content={"detail": "Database error"})
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


app.include_router(programs.router, prefix="/api/v1")
app.include_router(admin_programs.router, prefix="/api/v1")


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "program-catalog"}


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
