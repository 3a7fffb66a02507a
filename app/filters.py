"""Pure filtering helpers deriving views from catalog and watchlist state."""

from __future__ import annotations

from typing import Iterable

from .config import ALL_CATEGORIES
from .models import Category, Movie


def matches_search_term(movie: Movie, search_term: str) -> bool:
    """Return whether the term occurs in the title or description, ignoring case."""

    needle = search_term.lower()
    if not needle:
        return True
    return needle in movie.title.lower() or needle in movie.description.lower()


def matches_category(movie: Movie, category: Category) -> bool:
    """Return whether the movie belongs to ``category``.

    Categories are compared by their string form so identifiers coming from
    query strings match the numeric genre codes TMDB assigns.
    """

    if category == ALL_CATEGORIES:
        return True
    return str(movie.category) == str(category)


def filter_catalog(
    movies: Iterable[Movie], *, category: Category, search_term: str
) -> list[Movie]:
    """Return catalog movies matching both the category and the search term."""

    return [
        movie
        for movie in movies
        if matches_category(movie, category) and matches_search_term(movie, search_term)
    ]


def filter_watchlist(movies: Iterable[Movie], *, search_term: str) -> list[Movie]:
    """Return watchlist movies matching the search term."""

    return [movie for movie in movies if matches_search_term(movie, search_term)]
