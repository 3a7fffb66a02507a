"""Detail overlay selection state."""

from __future__ import annotations

from .models import Movie, MovieId, SelectionState


class SelectionController:
    """Tracks the single movie, if any, shown in the detail overlay."""

    def __init__(self) -> None:
        self._selected: Movie | None = None

    @property
    def selected(self) -> Movie | None:
        return self._selected

    @property
    def is_open(self) -> bool:
        return self._selected is not None

    def select(self, movie: Movie) -> None:
        """Open the overlay on ``movie``, replacing any current selection."""

        self._selected = movie

    def close(self) -> None:
        self._selected = None

    def is_selected(self, movie_id: MovieId) -> bool:
        return self._selected is not None and self._selected.id == movie_id

    def state(self) -> SelectionState:
        return SelectionState(movie=self._selected, is_open=self.is_open)
