"""
OMDb integration client (poster lookup).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from movie_catalog.integrations.omdb.client import (
        OmdbClientError,
        extract_poster_url,
        fetch_poster_url,
        fetch_title,
    )

__all__ = [
    "OmdbClientError",
    "extract_poster_url",
    "fetch_poster_url",
    "fetch_title",
]


def __getattr__(name: str):
    if name in __all__:
        from movie_catalog.integrations.omdb import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
