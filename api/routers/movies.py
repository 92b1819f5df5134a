"""
Movie catalog endpoints: list, add, random recommendation, delete.
"""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from api.deps import PosterLookupDep, SupabaseClient
from movie_catalog.catalog import (
    MISSING_FIELDS_MESSAGE,
    MovieNotFoundError,
    MovieValidationError,
    add_movie,
    delete_movie,
    list_catalog,
    pick_random_movie,
)
from movie_catalog.repositories.movies import MovieRepositoryError

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/movies", tags=["movies"])


# --- Pydantic models ---


class Movie(BaseModel):
    id: UUID
    title: str
    genre: str
    rating: float
    year: int
    poster_url: str = Field(serialization_alias="posterUrl")


class MovieCreate(BaseModel):
    """
    Movie creation payload.
    Every field is optional and loosely typed here so missing, blank, boolean, or
    out-of-range values are reported as 400 by the catalog, not as a schema error.
    `bool` comes last so JSON true/false stays a bool instead of coercing to 1/0.
    """

    title: str | None = None
    genre: str | None = None
    rating: float | str | bool | None = None
    year: int | str | bool | None = None


class MessageResponse(BaseModel):
    message: str


def _store_failure(exc: MovieRepositoryError, action: str) -> HTTPException:
    # Don't leak internal error details to client
    logger.error(f"Store error while {action}: {exc}")
    return HTTPException(status_code=500, detail=f"Server error while {action}")


# --- Endpoints ---


@router.get("", response_model=list[Movie])
def list_all_movies(db: SupabaseClient) -> list[dict]:
    """List every movie in insertion order. Sorting and filtering happen client-side."""
    try:
        return [movie.to_dict() for movie in list_catalog(db)]
    except MovieRepositoryError as exc:
        raise _store_failure(exc, "fetching movies") from exc


@router.post("", response_model=Movie, status_code=201)
def create_movie(db: SupabaseClient, poster_lookup: PosterLookupDep, movie: MovieCreate) -> dict:
    """
    Add a movie. The poster URL is fetched from OMDb once and stored with the row.
    """
    try:
        created = add_movie(
            db,
            title=movie.title,
            genre=movie.genre,
            rating=movie.rating,
            year=movie.year,
            poster_lookup=poster_lookup,
        )
    except MovieValidationError as exc:
        detail = str(exc)
        if detail == MISSING_FIELDS_MESSAGE and exc.missing_fields:
            detail = f"{detail}: {', '.join(exc.missing_fields)}"
        raise HTTPException(status_code=400, detail=detail) from exc
    except MovieRepositoryError as exc:
        raise _store_failure(exc, "adding movie") from exc
    return created.to_dict()


@router.get("/random", response_model=Movie | None)
def get_random_movie(db: SupabaseClient) -> dict | None:
    """Recommend one movie at random; `null` when the catalog is empty."""
    try:
        movie = pick_random_movie(db)
    except MovieRepositoryError as exc:
        raise _store_failure(exc, "fetching random movie") from exc
    return movie.to_dict() if movie else None


@router.delete("/{movie_id}", response_model=MessageResponse)
def remove_movie(db: SupabaseClient, movie_id: str) -> dict:
    """Delete a movie by id."""
    try:
        delete_movie(db, movie_id)
    except MovieNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Movie not found") from exc
    except MovieRepositoryError as exc:
        raise _store_failure(exc, "deleting movie") from exc
    return {"message": "Movie deleted successfully"}
