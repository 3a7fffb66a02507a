"""Movie Pedia: browse popular TMDB movies and keep a watchlist."""

from __future__ import annotations

from app.main import app, create_app
from app.session import MovieSession

__version__ = "1.0.0"

__all__ = ["MovieSession", "__version__", "app", "create_app"]
