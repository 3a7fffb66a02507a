"""Entry point for the FastAPI-powered movie catalog browser."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from .config import settings
from .errors import MovieNotFound
from .models import MovieId
from .services.catalog_store import CatalogStore
from .services.tmdb import TMDBClient
from .session import MovieSession
from .web import render_page

logging.basicConfig(level=getattr(logging, settings.log_level))
logger = logging.getLogger(__name__)

app: FastAPI


class CategoryUpdate(BaseModel):
    category: str


class SearchUpdate(BaseModel):
    term: str = ""


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    tmdb_http_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=str(settings.tmdb_api_url),
            timeout=httpx.Timeout(20.0, connect=10.0),
        )
    )
    tmdb = TMDBClient(settings, tmdb_http_client)
    store = CatalogStore(
        tmdb.fetch_popular_movies,
        image_base_url=settings.tmdb_image_base_url,
        ready_delay_seconds=settings.loading_delay_seconds,
    )
    session = MovieSession(store, categories=settings.categories)

    fastapi_app.state.session = session
    session.start()

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await session.stop()
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Browse popular movies and curate a watchlist",
        version="1.0.0",
        lifespan=lifespan,
    )
    register_routes(fastapi_app)
    return fastapi_app


def get_session(app: FastAPI) -> MovieSession:
    session = getattr(app.state, "session", None)
    if not isinstance(session, MovieSession):
        raise RuntimeError("Movie session not initialised")
    return session


def resolve_movie_id(session: MovieSession, raw: str) -> MovieId:
    """Map a path segment to the id the session knows.

    TMDB ids are integers, so digit strings resolve to ``int`` unless only the
    string form names a known movie.
    """

    value = raw.strip()
    if not value.isdigit():
        return value
    numeric = int(value)
    if session.knows(numeric) or not session.knows(value):
        return numeric
    return value


def register_routes(fastapi_app: FastAPI) -> None:
    def _state() -> dict[str, Any]:
        return get_session(fastapi_app).view().to_payload()

    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(render_page(settings))

    @fastapi_app.get("/api/state")
    async def read_state() -> dict[str, Any]:
        return _state()

    @fastapi_app.post("/api/category")
    async def set_category(update: CategoryUpdate) -> dict[str, Any]:
        get_session(fastapi_app).set_category(update.category)
        return _state()

    @fastapi_app.post("/api/search")
    async def set_search_term(update: SearchUpdate) -> dict[str, Any]:
        get_session(fastapi_app).set_search_term(update.term)
        return _state()

    @fastapi_app.post("/api/watchlist/search")
    async def set_watchlist_search_term(update: SearchUpdate) -> dict[str, Any]:
        get_session(fastapi_app).set_watchlist_search_term(update.term)
        return _state()

    @fastapi_app.post("/api/selection/{movie_id}")
    async def select_movie(movie_id: str) -> dict[str, Any]:
        try:
            session = get_session(fastapi_app)
            session.select_movie(resolve_movie_id(session, movie_id))
        except MovieNotFound as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return _state()

    @fastapi_app.delete("/api/selection")
    async def close_overlay() -> dict[str, Any]:
        get_session(fastapi_app).close_overlay()
        return _state()

    @fastapi_app.post("/api/watchlist/{movie_id}")
    async def add_to_watchlist(movie_id: str) -> dict[str, Any]:
        try:
            session = get_session(fastapi_app)
            session.add_to_watchlist(resolve_movie_id(session, movie_id))
        except MovieNotFound as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return _state()

    @fastapi_app.delete("/api/watchlist/{movie_id}")
    async def remove_from_watchlist(movie_id: str) -> dict[str, Any]:
        session = get_session(fastapi_app)
        session.remove_from_watchlist(resolve_movie_id(session, movie_id))
        return _state()


app = create_app()
