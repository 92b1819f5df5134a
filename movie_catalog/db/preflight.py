"""
Database preflight checks for the movie catalog.

Use these helpers to fail fast with clear errors when the API or a script
targets the wrong database (e.g., the `movies` table was never created).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from movie_catalog.repositories.movies import MOVIES_SCHEMA, MOVIES_TABLE

if TYPE_CHECKING:
    from supabase import Client


class DatabasePreflightError(RuntimeError):
    """Raised when a database preflight check fails."""

    pass


def _is_missing_schema_error(message: str) -> bool:
    """Check if error indicates schema does not exist."""
    msg = (message or "").casefold()
    return (
        "3f000" in msg  # invalid_schema_name
        or ("schema" in msg and "does not exist" in msg)
        or "pgrst106" in msg  # postgrest invalid schema
    )


def _is_missing_table_error(message: str) -> bool:
    """Check if error indicates table does not exist."""
    msg = (message or "").casefold()
    return (
        "42p01" in msg  # undefined_table
        or "pgrst205" in msg  # postgrest relation not found
        or ("relation" in msg and "does not exist" in msg)
        or ("could not find" in msg and "table" in msg)
    )


def _missing_schema_message() -> str:
    return (
        f"Database preflight failed: schema `{MOVIES_SCHEMA}` is not reachable.\n"
        "This likely means you're connected to the wrong project.\n"
        "Check SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY environment variables."
    )


def _missing_table_message() -> str:
    return (
        f"Database preflight failed: table `{MOVIES_SCHEMA}.{MOVIES_TABLE}` does not exist.\n"
        "Apply `supabase/migrations/0001_movies.sql` (e.g. `supabase db push`) before starting the API."
    )


def assert_movies_table_exists(db: Client) -> None:
    """
    Verify that the movies table is reachable through the connected Supabase project.

    Raises DatabasePreflightError with actionable guidance if the schema or table is missing,
    or if the store cannot be reached at all.
    """
    try:
        response = db.schema(MOVIES_SCHEMA).table(MOVIES_TABLE).select("id").limit(1).execute()
    except Exception as exc:
        msg = str(exc)
        if _is_missing_schema_error(msg):
            raise DatabasePreflightError(_missing_schema_message()) from exc
        if _is_missing_table_error(msg):
            raise DatabasePreflightError(_missing_table_message()) from exc
        raise DatabasePreflightError(f"Database preflight failed: {exc}") from exc

    error = getattr(response, "error", None)
    if not error:
        return

    parts = [
        str(getattr(error, "code", "") or ""),
        str(getattr(error, "message", "") or ""),
        str(getattr(error, "details", "") or ""),
        str(error),
    ]
    combined = " ".join([p for p in parts if p]).strip()
    if _is_missing_schema_error(combined):
        raise DatabasePreflightError(_missing_schema_message())
    if _is_missing_table_error(combined):
        raise DatabasePreflightError(_missing_table_message())
    raise DatabasePreflightError(f"Database preflight failed: {combined}")
