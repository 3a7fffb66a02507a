"""Client for fetching the popular movie catalog from The Movie Database (TMDB)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..errors import FetchError

logger = logging.getLogger(__name__)

POPULAR_MOVIES_PATH = "/movie/popular"


class TMDBClient:
    """Client responsible for requesting raw movie records from TMDB."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._client = http_client

    async def fetch_popular_movies(self) -> list[dict[str, Any]]:
        """Return the raw ``results`` of the popular movies endpoint.

        Any transport, status or payload problem is raised as ``FetchError``.
        """

        if not self._settings.tmdb_api_key:
            raise FetchError("TMDB API key is not configured")

        params = {"api_key": self._settings.tmdb_api_key}
        try:
            response = await self._client.get(POPULAR_MOVIES_PATH, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"TMDB popular movies request failed with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"TMDB popular movies request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError("TMDB returned an invalid JSON payload") from exc

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise FetchError("TMDB payload is missing the results list")

        logger.debug("TMDB returned %s popular movies", len(results))
        return results
