"""Exceptions raised by the Movie Pedia core."""

from __future__ import annotations


class MoviePediaError(Exception):
    """Base class for application errors."""


class MalformedRecord(MoviePediaError, ValueError):
    """A single provider record could not be normalized into a movie."""


class FetchError(MoviePediaError):
    """The catalog request failed as a whole (transport, status or payload)."""


class MovieNotFound(MoviePediaError, KeyError):
    """An event referenced a movie id that is not known to the session."""

    def __init__(self, movie_id: object) -> None:
        super().__init__(f"Movie {movie_id} not found")
        self.movie_id = movie_id

    def __str__(self) -> str:
        return str(self.args[0])
