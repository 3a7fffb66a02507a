"""Insertion-ordered, deduplicated watchlist."""

from __future__ import annotations

from typing import Iterator

from .models import Movie, MovieId


class Watchlist:
    """User-curated subset of the catalog keyed by movie id."""

    def __init__(self) -> None:
        self._entries: dict[MovieId, Movie] = {}

    def add(self, movie: Movie) -> bool:
        """Append the movie unless an entry with the same id already exists."""

        if movie.id in self._entries:
            return False
        self._entries[movie.id] = movie
        return True

    def remove(self, movie_id: MovieId) -> bool:
        return self._entries.pop(movie_id, None) is not None

    def contains(self, movie_id: MovieId) -> bool:
        return movie_id in self._entries

    def get(self, movie_id: MovieId) -> Movie | None:
        return self._entries.get(movie_id)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def movies(self) -> list[Movie]:
        return list(self._entries.values())

    @property
    def ids(self) -> list[MovieId]:
        return list(self._entries)

    def __contains__(self, movie_id: object) -> bool:
        return movie_id in self._entries

    def __iter__(self) -> Iterator[Movie]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)
