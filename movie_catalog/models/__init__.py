"""
Domain models shared across scripts and services.
"""

from movie_catalog.models.movies import PLACEHOLDER_POSTER_URL, MovieInsert, MovieRecord

__all__ = [
    "PLACEHOLDER_POSTER_URL",
    "MovieInsert",
    "MovieRecord",
]
