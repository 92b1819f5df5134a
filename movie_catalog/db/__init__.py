"""
Database helpers for the movie catalog API and scripts.
"""

from movie_catalog.db.preflight import DatabasePreflightError, assert_movies_table_exists
from movie_catalog.db.supabase import create_supabase_admin_client

__all__ = [
    "DatabasePreflightError",
    "assert_movies_table_exists",
    "create_supabase_admin_client",
]
