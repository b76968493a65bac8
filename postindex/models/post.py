"""Post metadata models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class PostRecord(BaseModel):
    """One post's metadata as serialized in the posts index.

    Records are frozen once loaded; filtering and rendering only read them.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True, extra="ignore")

    title: str = ""
    url: str = ""
    date: str = ""
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    excerpt: str = ""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        """Treat explicit nulls as missing fields."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("categories", "tags", mode="before")
    @classmethod
    def _listify(cls, value: Any) -> Any:
        # A bare string is one label, not a sequence of characters
        if isinstance(value, str):
            return (value,) if value else ()
        if isinstance(value, (list, tuple)):
            return tuple(v for v in value if v is not None)
        return value

    def labels(self) -> tuple[str, ...]:
        """Categories followed by tags."""
        return self.categories + self.tags


class PostCollection(BaseModel):
    """The read-only post set for one page load."""

    model_config = ConfigDict(frozen=True)

    posts: tuple[PostRecord, ...] = ()
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.posts)
