"""Session controller wiring catalog, filters, watchlist and selection."""

from __future__ import annotations

import logging
from typing import Iterable

from .config import ALL_CATEGORIES, DEFAULT_CATEGORIES
from .errors import MovieNotFound
from .filters import filter_catalog, filter_watchlist
from .models import FilteredView, Movie, MovieId, SessionView
from .selection import SelectionController
from .services.catalog_store import CatalogStore
from .watchlist import Watchlist

logger = logging.getLogger(__name__)


class MovieSession:
    """State for one browsing session.

    Event methods mutate state synchronously; the filtered views are derived
    from the current state every time they are read.
    """

    def __init__(
        self,
        store: CatalogStore,
        *,
        categories: Iterable[str] = DEFAULT_CATEGORIES,
    ) -> None:
        self.store = store
        self.watchlist = Watchlist()
        self.selection = SelectionController()
        self.categories: tuple[str, ...] = tuple(categories)
        self.category: str = ALL_CATEGORIES
        self.search_term = ""
        self.watchlist_search_term = ""

    def start(self) -> None:
        """Kick off the catalog load."""

        self.store.start()

    async def stop(self) -> None:
        """End the session, discarding any in-flight load and user state."""

        await self.store.stop()
        self.watchlist.clear()
        self.selection.close()

    def set_category(self, category: str) -> None:
        self.category = category

    def set_search_term(self, search_term: str) -> None:
        self.search_term = search_term

    def set_watchlist_search_term(self, search_term: str) -> None:
        self.watchlist_search_term = search_term

    def select_movie(self, movie_id: MovieId) -> Movie:
        """Open the detail overlay on a catalog or watchlist movie."""

        movie = self._lookup(movie_id)
        if movie is None:
            raise MovieNotFound(movie_id)
        self.selection.select(movie)
        return movie

    def close_overlay(self) -> None:
        self.selection.close()

    def add_to_watchlist(self, movie_id: MovieId) -> bool:
        """Add a catalog movie to the watchlist; returns ``False`` if already present."""

        if self.watchlist.contains(movie_id):
            return False
        movie = self.store.get(movie_id)
        if movie is None:
            raise MovieNotFound(movie_id)
        added = self.watchlist.add(movie)
        logger.debug("Added movie %s to the watchlist", movie_id)
        return added

    def remove_from_watchlist(self, movie_id: MovieId) -> bool:
        """Remove a movie from the watchlist.

        Removing the movie shown in the detail overlay also closes the overlay.
        """

        removed = self.watchlist.remove(movie_id)
        if self.selection.is_selected(movie_id):
            self.selection.close()
        return removed

    def in_watchlist(self, movie_id: MovieId) -> bool:
        return self.watchlist.contains(movie_id)

    def catalog_view(self) -> FilteredView:
        if self.store.is_loading:
            return FilteredView(is_loading=True)
        movies = filter_catalog(
            self.store.movies, category=self.category, search_term=self.search_term
        )
        return FilteredView(movies=movies)

    def watchlist_view(self) -> FilteredView:
        movies = filter_watchlist(self.watchlist, search_term=self.watchlist_search_term)
        return FilteredView(movies=movies)

    def view(self) -> SessionView:
        """Snapshot everything a renderer needs for the current state."""

        return SessionView(
            phase=self.store.phase,
            category=self.category,
            categories=list(self.categories),
            search_term=self.search_term,
            watchlist_search_term=self.watchlist_search_term,
            catalog=self.catalog_view(),
            watchlist=self.watchlist_view(),
            watchlist_ids=self.watchlist.ids,
            selection=self.selection.state(),
        )

    def knows(self, movie_id: MovieId) -> bool:
        """Return whether the id names a catalog or watchlist movie."""

        return self._lookup(movie_id) is not None

    def _lookup(self, movie_id: MovieId) -> Movie | None:
        return self.store.get(movie_id) or self.watchlist.get(movie_id)
