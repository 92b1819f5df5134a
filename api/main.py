"""
Movie Catalog API - FastAPI application.

Provides endpoints for:
- Listing and adding movies (posters fetched from OMDb on add)
- Random movie recommendations
- Deleting movies
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.deps import check_required_config, get_cors_origins, get_supabase_client
from api.routers import movies
from movie_catalog.db.preflight import assert_movies_table_exists

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: missing store config or an unreachable movies table is fatal
    logger.info("Starting up Movie Catalog API...")
    check_required_config()
    assert_movies_table_exists(get_supabase_client())
    logger.info("Movie store preflight passed")
    yield
    # Shutdown
    logger.info("Shutting down Movie Catalog API...")


app = FastAPI(
    title="Movie Catalog API",
    description="Backend API for the movie night catalog - list, add, delete, and recommend movies",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
# Set CORS_ALLOW_ORIGINS env var with comma-separated origins for production
# If no origins configured, allows all origins but disables credentials
cors_origins = get_cors_origins()
allow_credentials = len(cors_origins) > 0  # Only allow credentials with explicit origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if cors_origins else ["*"],
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Include routers
app.include_router(movies.router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "movie-catalog",
        "message": "Movie Recommendation Backend Server Running",
    }


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
