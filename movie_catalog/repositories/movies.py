from __future__ import annotations

from typing import Any
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from movie_catalog.models.movies import MovieInsert

MOVIES_SCHEMA = "public"
MOVIES_TABLE = "movies"
MOVIE_SELECT_FIELDS = "id,title,genre,rating,year,poster_url"

# Insertion order; `id` breaks ties between rows created in the same instant.
_ORDER_COLUMNS = ("created_at", "id")


class MovieRepositoryError(RuntimeError):
    pass


def _movies(db: Client):
    return db.schema(MOVIES_SCHEMA).table(MOVIES_TABLE)


def _ordered(query):
    for column in _ORDER_COLUMNS:
        query = query.order(column)
    return query


def _raise_for_supabase_error(response: Any, context: str) -> None:
    if hasattr(response, "error") and response.error:
        raise MovieRepositoryError(f"Supabase error during {context}: {response.error}")


def _execute(query, context: str) -> Any:
    try:
        response = query.execute()
    except (APIError, httpx.HTTPError) as exc:
        raise MovieRepositoryError(f"Supabase error during {context}: {exc}") from exc
    _raise_for_supabase_error(response, context)
    return response


def _rows(response: Any) -> list[dict[str, Any]]:
    data = response.data or []
    if not isinstance(data, list):
        raise MovieRepositoryError("Supabase returned unexpected response shape (not a list).")
    return [row for row in data if isinstance(row, dict)]


def insert_movie(db: Client, movie: MovieInsert) -> dict[str, Any]:
    """Insert a movie row; the store assigns `id` and `created_at`."""
    response = _execute(_movies(db).insert(movie.to_row()), "inserting movie")
    rows = _rows(response)
    if rows:
        return rows[0]
    raise MovieRepositoryError("Supabase insert returned no data for movie.")


def list_movies(db: Client) -> list[dict[str, Any]]:
    query = _ordered(_movies(db).select(MOVIE_SELECT_FIELDS))
    return _rows(_execute(query, "listing movies"))


def count_movies(db: Client) -> int:
    response = _execute(_movies(db).select("id", count="exact").limit(1), "counting movies")
    count = getattr(response, "count", None)
    if isinstance(count, int):
        return count
    raise MovieRepositoryError("Supabase count returned no total for movies.")


def find_movie_at_offset(db: Client, offset: int) -> dict[str, Any] | None:
    """
    Return the movie at `offset` in insertion order, or None when the offset is past the end.
    """
    if offset < 0:
        return None
    query = _ordered(_movies(db).select(MOVIE_SELECT_FIELDS)).range(offset, offset)
    rows = _rows(_execute(query, "fetching movie by offset"))
    return rows[0] if rows else None


def delete_movie_by_id(db: Client, movie_id: UUID | str) -> bool:
    """
    Delete a movie by id. Returns False when no row matched.

    Ids that are not UUIDs cannot exist in the table, so they short-circuit to False
    instead of surfacing a Postgres cast error.
    """
    try:
        movie_uuid = UUID(str(movie_id))
    except ValueError:
        return False

    response = _execute(_movies(db).delete().eq("id", str(movie_uuid)), "deleting movie")
    return bool(_rows(response))
