"""Authoritative catalog state and the one-shot fetch that fills it."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Any, Awaitable, Callable, Sequence

from ..errors import FetchError, MalformedRecord
from ..models import LoadingPhase, Movie, MovieId

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Sequence[Any]]]


class CatalogStore:
    """Holds the normalized catalog and its loading phase.

    The catalog is loaded once per store. ``start`` schedules the load in a
    background task so event handlers keep running against the current (empty)
    catalog while the request is outstanding.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        image_base_url: str,
        ready_delay_seconds: float = 3.0,
    ) -> None:
        self._fetcher = fetcher
        self._image_base_url = image_base_url
        self._ready_delay_seconds = ready_delay_seconds
        self._phase = LoadingPhase.EMPTY
        self._movies: tuple[Movie, ...] = ()
        self._index: dict[MovieId, Movie] = {}
        self._load_task: asyncio.Task[None] | None = None
        self._stopped = False

    @property
    def phase(self) -> LoadingPhase:
        return self._phase

    @property
    def is_loading(self) -> bool:
        return self._phase in (LoadingPhase.EMPTY, LoadingPhase.LOADING)

    @property
    def movies(self) -> tuple[Movie, ...]:
        return self._movies

    def get(self, movie_id: MovieId) -> Movie | None:
        return self._index.get(movie_id)

    def start(self) -> None:
        """Begin loading the catalog in the background."""

        if self._phase is not LoadingPhase.EMPTY or self._stopped:
            return
        self._phase = LoadingPhase.LOADING
        self._load_task = asyncio.create_task(self._run_load())

    async def stop(self) -> None:
        """Discard any outstanding load; the store no longer changes phase."""

        self._stopped = True
        if self._load_task is None:
            return
        self._load_task.cancel()
        with suppress(asyncio.CancelledError):
            await self._load_task
        self._load_task = None

    async def wait_until_settled(self) -> LoadingPhase:
        """Wait for the outstanding load, if any, and return the final phase."""

        if self._load_task is not None:
            await asyncio.shield(self._load_task)
        return self._phase

    async def load(self) -> None:
        """Fetch, normalize and publish the catalog in the foreground."""

        if self._phase is not LoadingPhase.EMPTY or self._stopped:
            return
        self._phase = LoadingPhase.LOADING
        await self._run_load()

    async def _run_load(self) -> None:
        try:
            records = await self._fetcher()
        except FetchError as exc:
            logger.exception("Error fetching movies: %s", exc)
            self._finish(LoadingPhase.FAILED, ())
            return
        except Exception as exc:  # pragma: no cover - background safety net
            logger.exception("Unexpected error fetching movies: %s", exc)
            self._finish(LoadingPhase.FAILED, ())
            return

        try:
            movies = self.normalize_records(records, image_base_url=self._image_base_url)
        except Exception as exc:
            logger.exception("Error normalizing movies: %s", exc)
            self._finish(LoadingPhase.FAILED, ())
            return
        logger.info(
            "Fetched %s movies; publishing in %ss", len(movies), self._ready_delay_seconds
        )
        if self._ready_delay_seconds > 0:
            await asyncio.sleep(self._ready_delay_seconds)
        self._finish(LoadingPhase.READY, movies)

    def _finish(self, phase: LoadingPhase, movies: Sequence[Movie]) -> None:
        if self._stopped:
            logger.debug("Discarding catalog load result after stop")
            return
        self._movies = tuple(movies)
        self._index = {movie.id: movie for movie in self._movies}
        self._phase = phase

    @staticmethod
    def normalize_records(
        records: Sequence[Any], *, image_base_url: str
    ) -> list[Movie]:
        """Normalize raw provider records, skipping malformed or duplicate ones."""

        movies: list[Movie] = []
        seen: set[MovieId] = set()
        for position, record in enumerate(records):
            try:
                movie = Movie.from_provider_record(record, image_base_url=image_base_url)
            except MalformedRecord as exc:
                logger.warning("Skipping provider record %s: %s", position, exc)
                continue
            if movie.id in seen:
                logger.warning("Skipping duplicate movie id %s", movie.id)
                continue
            seen.add(movie.id)
            movies.append(movie)
        return movies
