"""Utility helpers for the Movie Pedia service."""

from __future__ import annotations


def build_image_url(base_url: str, path: str | None) -> str:
    """Join the image base path and a provider-relative poster path."""

    if not path:
        return ""
    if path.startswith("http"):
        return path
    return f"{base_url}{path}"

