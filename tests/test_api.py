"""HTTP surface tests."""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.main import register_routes, resolve_movie_id
from app.services.catalog_store import CatalogStore
from app.session import MovieSession

from factories import IMAGE_BASE, raw_record


def build_app(*, loaded: bool = True, extra: list[Any] | None = None) -> FastAPI:
    async def fetcher() -> list[Any]:
        return [
            raw_record(1, "Dune", genre_ids=[878]),
            raw_record(2, "Her", overview="A Love story", genre_ids=[18]),
            *(extra or []),
        ]

    store = CatalogStore(fetcher, image_base_url=IMAGE_BASE, ready_delay_seconds=0)
    if loaded:
        asyncio.run(store.load())
    app = FastAPI()
    register_routes(app)
    app.state.session = MovieSession(store)
    return app


def test_healthcheck() -> None:
    with TestClient(build_app()) as client:
        response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_state_reports_loading_before_catalog_arrives() -> None:
    with TestClient(build_app(loaded=False)) as client:
        payload = client.get("/api/state").json()

    assert payload["is_loading"] is True
    assert payload["catalog"]["movies"] == []
    assert payload["catalog"]["no_results"] is False


def test_category_and_search_updates_filter_catalog() -> None:
    with TestClient(build_app()) as client:
        by_category = client.post("/api/category", json={"category": "878"}).json()
        client.post("/api/category", json={"category": "all"})
        by_term = client.post("/api/search", json={"term": "LOVE"}).json()

    assert [movie["id"] for movie in by_category["catalog"]["movies"]] == [1]
    assert [movie["id"] for movie in by_term["catalog"]["movies"]] == [2]


def test_watchlist_round_trip_closes_overlay() -> None:
    with TestClient(build_app()) as client:
        added = client.post("/api/watchlist/2").json()
        selected = client.post("/api/selection/2").json()
        removed = client.delete("/api/watchlist/2").json()

    assert added["watchlist_ids"] == [2]
    assert selected["selection"]["is_open"] is True
    assert removed["watchlist_ids"] == []
    assert removed["selection"]["is_open"] is False


def test_watchlist_search_does_not_clash_with_movie_routes() -> None:
    with TestClient(build_app()) as client:
        client.post("/api/watchlist/1")
        client.post("/api/watchlist/2")
        payload = client.post("/api/watchlist/search", json={"term": "dune"}).json()

    assert [movie["id"] for movie in payload["watchlist"]["movies"]] == [1]
    assert payload["watchlist_ids"] == [1, 2]


def test_close_overlay() -> None:
    with TestClient(build_app()) as client:
        client.post("/api/selection/1")
        payload = client.delete("/api/selection").json()

    assert payload["selection"] == {"movie": None, "is_open": False}


def test_unknown_movie_returns_404() -> None:
    with TestClient(build_app()) as client:
        assert client.post("/api/watchlist/999").status_code == 404
        assert client.post("/api/selection/999").status_code == 404
        assert client.delete("/api/watchlist/999").status_code == 200


def test_index_renders_page() -> None:
    with TestClient(build_app()) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert "No movies found." in response.text
    assert '"descriptionPreviewLength": 150' in response.text
    assert "pollTimer === null" in response.text


def test_resolve_movie_id_prefers_known_form() -> None:
    app = build_app(extra=[raw_record("42", "String Id")])
    session = app.state.session

    assert resolve_movie_id(session, "2") == 2
    assert resolve_movie_id(session, "42") == "42"
    assert resolve_movie_id(session, "999") == 999
    assert resolve_movie_id(session, " tt123 ") == "tt123"


def test_digit_string_ids_are_reachable_over_http() -> None:
    with TestClient(build_app(extra=[raw_record("42", "String Id")])) as client:
        added = client.post("/api/watchlist/42").json()
        selected = client.post("/api/selection/42").json()
        removed = client.delete("/api/watchlist/42").json()

    assert added["watchlist_ids"] == ["42"]
    assert selected["selection"]["movie"]["title"] == "String Id"
    assert removed["watchlist_ids"] == []
    assert removed["selection"]["is_open"] is False
