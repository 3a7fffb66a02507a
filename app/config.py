"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Iterable, Literal

from pydantic import AliasChoices, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


ALL_CATEGORIES = "all"
DEFAULT_CATEGORIES: tuple[str, ...] = (
    ALL_CATEGORIES,
    "action",
    "comedy",
    "drama",
    "horror",
    "romance",
)


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="Movie Pedia", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    tmdb_api_key: str | None = Field(
        default=None,
        alias="TMDB_API_KEY",
        validation_alias=AliasChoices("TMDB_API_KEY", "VITE_API_KEY"),
    )
    tmdb_api_url: HttpUrl = Field(
        default="https://api.themoviedb.org/3", alias="TMDB_API_URL"
    )
    tmdb_image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w500", alias="TMDB_IMAGE_BASE_URL"
    )

    loading_delay_seconds: float = Field(
        default=3.0, alias="LOADING_DELAY_SECONDS", ge=0
    )
    categories: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_CATEGORIES, alias="CATEGORIES"
    )
    description_preview_length: int = Field(
        default=150, alias="DESCRIPTION_PREVIEW_LENGTH", ge=1
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    @field_validator("categories", mode="before")
    @classmethod
    def _parse_categories(cls, value: object) -> tuple[str, ...]:
        """Normalise category selections from environment values."""

        if value is None:
            return DEFAULT_CATEGORIES
        if isinstance(value, str):
            raw_values = [part.strip() for part in value.split(",")]
        elif isinstance(value, Iterable):
            raw_values = [str(part).strip() for part in value]
        else:
            raise TypeError("CATEGORIES must be a string or iterable of strings")

        cleaned: list[str] = [ALL_CATEGORIES]
        for entry in raw_values:
            slug = entry.lower()
            if slug and slug not in cleaned:
                cleaned.append(slug)
        if len(cleaned) == 1:
            return DEFAULT_CATEGORIES
        return tuple(cleaned)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("tmdb_image_base_url")
    @classmethod
    def _strip_image_base(cls, value: str) -> str:
        return value.strip().rstrip("/")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", populate_by_name=True
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
