"""
Repository layer for DB access patterns.
"""

from movie_catalog.repositories.movies import (
    MovieRepositoryError,
    count_movies,
    delete_movie_by_id,
    find_movie_at_offset,
    insert_movie,
    list_movies,
)

__all__ = [
    "MovieRepositoryError",
    "count_movies",
    "delete_movie_by_id",
    "find_movie_at_offset",
    "insert_movie",
    "list_movies",
]
