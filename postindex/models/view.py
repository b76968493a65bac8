"""View state and render models for the posts list."""

from pydantic import BaseModel, Field, field_validator

ALL_CATEGORIES = "all"


class ViewState(BaseModel):
    """Search, filter and pagination parameters driving the render."""

    query: str = ""
    category: str = ""
    page_size: int = Field(default=10, ge=1)
    page: int = Field(default=1, ge=1)

    @field_validator("category")
    @classmethod
    def _normalize_all(cls, value: str) -> str:
        """The "all" sentinel means no category filter."""
        if value.strip().lower() == ALL_CATEGORIES:
            return ""
        return value


class Chip(BaseModel):
    """A badge for one category or tag."""

    label: str
    kind: str  # category, tag
    title: str


class PostEntry(BaseModel):
    """One visible row of the list."""

    title: str
    url: str
    date: str
    date_display: str
    excerpt: str = ""
    chips: list[Chip] = []


class PageControl(BaseModel):
    """A pagination button: Prev, Next or a page number."""

    label: str
    page: int
    disabled: bool = False
    active: bool = False


class ListView(BaseModel):
    """Everything needed to paint the list for the current state."""

    state: ViewState
    entries: list[PostEntry]
    summary: str
    controls: list[PageControl]
    total: int
    filtered: int
    total_pages: int
    range_from: int = 0
    range_to: int = 0
    empty_message: str | None = None
    location: str = ""


class Facet(BaseModel):
    """A category or tag value with the number of posts carrying it."""

    name: str
    count: int


class FacetIndex(BaseModel):
    """Options for the category dropdown."""

    categories: list[Facet] = []
    tags: list[Facet] = []
