"""
Movie catalog operations: list, add (with poster enrichment), random pick, delete.

Every function takes the Supabase client explicitly and keeps no state between calls.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Callable
from uuid import UUID

from supabase import Client

from movie_catalog.integrations.omdb.client import fetch_poster_url
from movie_catalog.models.movies import MovieInsert, MovieRecord
from movie_catalog.repositories.movies import (
    count_movies,
    delete_movie_by_id,
    find_movie_at_offset,
    insert_movie,
    list_movies,
)

logger = logging.getLogger(__name__)

PosterLookup = Callable[[str], str]

REQUIRED_FIELDS = ("title", "genre", "rating", "year")
MISSING_FIELDS_MESSAGE = "All fields are required"

# Four-digit calendar years; 0 stays accepted as a present value.
MIN_YEAR = 0
MAX_YEAR = 9999


class MovieValidationError(ValueError):
    def __init__(self, message: str, *, missing_fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing_fields = missing_fields or []


class MovieNotFoundError(LookupError):
    def __init__(self, movie_id: UUID | str) -> None:
        super().__init__(f"Movie not found: {movie_id}")
        self.movie_id = str(movie_id)


def _is_missing(value: Any) -> bool:
    # 0 is a real rating/year; only None and blank text count as absent.
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_movie_fields(
    *,
    title: Any,
    genre: Any,
    rating: Any,
    year: Any,
) -> tuple[str, str, float, int]:
    """
    Check that every required field is present and coerce it to its stored type.

    Raises MovieValidationError listing the missing (or unusable) fields.
    """

    values = {"title": title, "genre": genre, "rating": rating, "year": year}
    missing = [name for name in REQUIRED_FIELDS if _is_missing(values[name])]
    if missing:
        raise MovieValidationError(MISSING_FIELDS_MESSAGE, missing_fields=missing)

    # JSON true/false would otherwise coerce to 1/0.
    if isinstance(rating, bool):
        raise MovieValidationError("rating must be a number", missing_fields=["rating"])
    if isinstance(year, bool):
        raise MovieValidationError("year must be a whole number", missing_fields=["year"])

    try:
        rating_value = float(rating)
    except (TypeError, ValueError) as exc:
        raise MovieValidationError("rating must be a number", missing_fields=["rating"]) from exc
    # nan/inf parse as floats but cannot be serialized as JSON numbers.
    if not math.isfinite(rating_value):
        raise MovieValidationError("rating must be a finite number", missing_fields=["rating"])

    if isinstance(year, float) and not year.is_integer():
        raise MovieValidationError("year must be a whole number", missing_fields=["year"])
    try:
        year_value = int(year)
    except (TypeError, ValueError, OverflowError) as exc:
        raise MovieValidationError("year must be a whole number", missing_fields=["year"]) from exc
    if not MIN_YEAR <= year_value <= MAX_YEAR:
        raise MovieValidationError(f"year must be between {MIN_YEAR} and {MAX_YEAR}", missing_fields=["year"])

    return str(title).strip(), str(genre).strip(), rating_value, year_value


def list_catalog(db: Client) -> list[MovieRecord]:
    """Return every movie in insertion order."""
    return [MovieRecord.from_row(row) for row in list_movies(db)]


def add_movie(
    db: Client,
    *,
    title: Any,
    genre: Any,
    rating: Any,
    year: Any,
    poster_lookup: PosterLookup | None = None,
) -> MovieRecord:
    """
    Validate, enrich with a poster URL, and persist a new movie.

    The poster is looked up once here and stored with the row; it is never refreshed.
    """

    clean_title, clean_genre, rating_value, year_value = validate_movie_fields(
        title=title,
        genre=genre,
        rating=rating,
        year=year,
    )

    lookup = poster_lookup or fetch_poster_url
    poster_url = lookup(clean_title)

    row = insert_movie(
        db,
        MovieInsert(
            title=clean_title,
            genre=clean_genre,
            rating=rating_value,
            year=year_value,
            poster_url=poster_url,
        ),
    )
    record = MovieRecord.from_row(row)
    logger.info(f"Added movie {record.id} ({record.title!r})")
    return record


def pick_random_movie(db: Client, *, rng: random.Random | None = None) -> MovieRecord | None:
    """
    Return a uniformly random movie, or None when the catalog is empty.

    Count and fetch are two separate store calls; a delete in between can make the
    offset overshoot, in which case None is returned.
    """

    count = count_movies(db)
    if count == 0:
        return None

    offset = (rng or random).randrange(count)
    row = find_movie_at_offset(db, offset)
    if row is None:
        logger.info(f"Random pick at offset {offset} of {count} found no movie (catalog changed)")
        return None
    return MovieRecord.from_row(row)


def delete_movie(db: Client, movie_id: UUID | str) -> None:
    if not delete_movie_by_id(db, movie_id):
        raise MovieNotFoundError(movie_id)
    logger.info(f"Deleted movie {movie_id}")
