from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

PLACEHOLDER_POSTER_URL = "https://via.placeholder.com/250x350?text=No+Image"


@dataclass(frozen=True)
class MovieRecord:
    """
    Canonical movie record (maps to `public.movies`).

    `id` is assigned by the store on insert and never changes afterwards.
    """

    id: str
    title: str
    genre: str
    rating: float
    year: int
    poster_url: str = PLACEHOLDER_POSTER_URL

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> MovieRecord:
        poster_url = row.get("poster_url")
        return cls(
            id=str(row["id"]),
            title=str(row["title"]),
            genre=str(row["genre"]),
            rating=float(row["rating"]),
            year=int(row["year"]),
            poster_url=poster_url if isinstance(poster_url, str) and poster_url else PLACEHOLDER_POSTER_URL,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "genre": self.genre,
            "rating": self.rating,
            "year": self.year,
            "poster_url": self.poster_url,
        }


@dataclass(frozen=True)
class MovieInsert:
    title: str
    genre: str
    rating: float
    year: int
    poster_url: str = PLACEHOLDER_POSTER_URL  # fetched once at creation, never refreshed

    def to_row(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "genre": self.genre,
            "rating": self.rating,
            "year": self.year,
            "poster_url": self.poster_url,
        }
