"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

SEARCHABLE_FIELDS = ("title", "excerpt", "categories", "tags")


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Posts data: a filesystem path or an http(s) URL to a JSON array
    posts_source: str = "posts.json"
    fetch_timeout: float = 15.0

    # Listing
    page_size_options: list[int] = [10, 20, 50]
    default_page_size: int = 10
    page_window: int = 5
    search_debounce_ms: int = 120
    search_fields: list[str] = ["title"]

    model_config = {"env_file": ".env", "env_prefix": "POSTINDEX_", "extra": "ignore"}

    @field_validator("page_size_options")
    @classmethod
    def _sorted_positive_sizes(cls, value: list[int]) -> list[int]:
        if not value or any(n < 1 for n in value):
            raise ValueError("page_size_options must be non-empty positive integers")
        return sorted(set(value))

    @field_validator("page_window")
    @classmethod
    def _positive_window(cls, value: int) -> int:
        if value < 1:
            raise ValueError("page_window must be at least 1")
        return value

    @field_validator("search_fields")
    @classmethod
    def _known_fields(cls, value: list[str]) -> list[str]:
        unknown = [f for f in value if f not in SEARCHABLE_FIELDS]
        if unknown:
            raise ValueError(f"Unknown search fields: {', '.join(unknown)}")
        return value

    @model_validator(mode="after")
    def _default_size_is_an_option(self) -> "Settings":
        if self.default_page_size not in self.page_size_options:
            raise ValueError("default_page_size must be one of page_size_options")
        return self

    @property
    def smallest_page_size(self) -> int:
        return self.page_size_options[0]


@lru_cache
def get_settings() -> Settings:
    return Settings()
