"""
Dependency injection for the Supabase client, poster lookup, and shared configuration.
"""
from __future__ import annotations

import logging
import os
from functools import lru_cache, partial
from typing import Annotated

from fastapi import Depends
from supabase import Client

from movie_catalog.catalog import PosterLookup
from movie_catalog.db.supabase import create_supabase_admin_client, get_supabase_settings
from movie_catalog.integrations.omdb.client import fetch_poster_url, resolve_api_key
from movie_catalog.utils.env import load_env

load_env()

logger = logging.getLogger(__name__)


@lru_cache
def get_omdb_api_key() -> str | None:
    return resolve_api_key()


def get_cors_origins() -> list[str]:
    """
    Get CORS allowed origins from environment.
    Set CORS_ALLOW_ORIGINS as comma-separated list of origins.
    Example: CORS_ALLOW_ORIGINS=https://movies.example.com,http://localhost:3000
    """
    origins_str = os.getenv("CORS_ALLOW_ORIGINS", "")
    if not origins_str:
        return []
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


def check_required_config() -> None:
    """
    Validate startup configuration.

    Raises SupabaseConfigError (a RuntimeError) naming every missing store setting. A missing
    OMDb key only degrades posters to the placeholder, so it is logged and tolerated.
    """
    get_supabase_settings()
    if get_omdb_api_key() is None:
        logger.warning("OMDB_API_KEY is not set; new movies will use the placeholder poster")


def get_supabase_client() -> Client:
    """
    Returns a Supabase client using the service role key (reads and writes `public.movies`).
    """
    return create_supabase_admin_client()


def get_poster_lookup() -> PosterLookup:
    """Returns the title -> poster URL function used when adding movies."""
    return partial(fetch_poster_url, api_key=get_omdb_api_key())


# Type aliases for dependency injection
SupabaseClient = Annotated[Client, Depends(get_supabase_client)]
PosterLookupDep = Annotated[PosterLookup, Depends(get_poster_lookup)]
