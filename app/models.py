"""Pydantic models describing movies and the derived session state."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    model_validator,
)

from .errors import MalformedRecord
from .utils import build_image_url

MovieId = int | str
Category = int | str

UNKNOWN_CATEGORY = "unknown"


class Movie(BaseModel):
    """A normalized catalog entry."""

    model_config = ConfigDict(frozen=True)

    id: MovieId
    title: str
    description: str = ""
    category: Category = UNKNOWN_CATEGORY
    image: str = ""
    release_date: str = ""
    rating: float = 0

    @classmethod
    def from_provider_record(
        cls, record: Mapping[str, Any], *, image_base_url: str
    ) -> "Movie":
        """Build a movie from a raw TMDB ``/movie/popular`` result."""

        if not isinstance(record, Mapping):
            raise MalformedRecord("Provider record is not an object")
        movie_id = record.get("id")
        if movie_id is None or isinstance(movie_id, bool) or movie_id == "":
            raise MalformedRecord("Provider record is missing an id")
        title = record.get("title")
        if not isinstance(title, str) or not title.strip():
            raise MalformedRecord(f"Provider record {movie_id} is missing a title")

        genre_ids = record.get("genre_ids") or []
        category: Category = UNKNOWN_CATEGORY
        if isinstance(genre_ids, (list, tuple)) and genre_ids:
            category = genre_ids[0]

        poster_path = record.get("poster_path")
        if not isinstance(poster_path, str):
            poster_path = None

        rating = record.get("vote_average")
        if not isinstance(rating, (int, float)) or isinstance(rating, bool):
            rating = 0

        try:
            return cls(
                id=movie_id,
                title=title,
                description=str(record.get("overview") or ""),
                category=category,
                image=build_image_url(image_base_url, poster_path),
                release_date=str(record.get("release_date") or ""),
                rating=rating,
            )
        except ValidationError as exc:
            raise MalformedRecord(
                f"Provider record {movie_id} could not be validated: {exc}"
            ) from exc


class LoadingPhase(str, Enum):
    """Lifecycle of the catalog fetch."""

    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class FilteredView(BaseModel):
    """Order-preserving subset of a collection matching the active filters."""

    movies: list[Movie] = Field(default_factory=list)
    is_loading: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def no_results(self) -> bool:
        return not self.is_loading and not self.movies

    @model_validator(mode="after")
    def _loading_views_are_empty(self) -> "FilteredView":
        if self.is_loading and self.movies:
            raise ValueError("A loading view cannot hold movies")
        return self


class SelectionState(BaseModel):
    """Detail overlay state."""

    movie: Movie | None = None
    is_open: bool = False


class SessionView(BaseModel):
    """Everything a renderer needs for one render cycle."""

    phase: LoadingPhase
    category: str
    categories: list[str]
    search_term: str
    watchlist_search_term: str
    catalog: FilteredView
    watchlist: FilteredView
    watchlist_ids: list[MovieId]
    selection: SelectionState

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-ready payload including derived flags."""

        payload = self.model_dump(mode="json")
        payload["is_loading"] = self.catalog.is_loading
        return payload
