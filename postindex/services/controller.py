"""List controller for the posts index page.

Owns the loaded posts and the ``ViewState``. Every transition is a
synchronous state change followed by a URL write and a full render, so there
is never an observable state that does not match the last render.

Lifecycle::

    controller = ListController(history=History("/posts/?q=vector"))
    controller.load(raw_json)
    controller.init_from_location()
    controller.set_page(2)
"""

import logging
import sys
import time
from collections.abc import Callable
from typing import Any

from postindex.config import Settings, get_settings
from postindex.models.post import PostCollection, PostRecord
from postindex.models.view import FacetIndex, ListView, ViewState
from postindex.services.debounce import Debouncer
from postindex.services.filtering import facets, filter_posts
from postindex.services.formatting import NO_POSTS_MESSAGE, results_summary, to_entry
from postindex.services.location import History, decode_state, with_state
from postindex.services.pagination import (
    clamp_page,
    page_bounds,
    page_controls,
    total_pages,
)
from postindex.services.post_loader import parse_posts

logger = logging.getLogger(__name__)

Listener = Callable[[ListView], None]


def render_view(
    filtered: list[PostRecord],
    total: int,
    state: ViewState,
    settings: Settings,
    location: str = "",
) -> ListView:
    """Render *state* over the already filtered posts.

    The page in *state* is clamped here as well, so the function is safe to
    call with any state.
    """
    count = len(filtered)
    pages = total_pages(count, state.page_size)
    current = clamp_page(state.page, pages)
    start, stop = page_bounds(current, state.page_size, count)
    visible = filtered[start:stop]
    range_from = start + 1 if count else 0
    range_to = start + len(visible)

    if count:
        controls = page_controls(current, pages, settings.page_window)
        empty_message = None
    else:
        controls = []
        empty_message = NO_POSTS_MESSAGE

    return ListView(
        state=state.model_copy(update={"page": current}),
        entries=[to_entry(p) for p in visible],
        summary=results_summary(count, range_from, range_to),
        controls=controls,
        total=total,
        filtered=count,
        total_pages=pages,
        range_from=range_from,
        range_to=range_to,
        empty_message=empty_message,
        location=location,
    )


class ListController:
    """Search, filter and paginate the posts of one page load."""

    def __init__(
        self,
        settings: Settings | None = None,
        history: History | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings or get_settings()
        self._history = history or History()
        self._posts: tuple[PostRecord, ...] = ()
        self._loaded = False
        self._filtered: list[PostRecord] = []
        self._total_pages = 1
        self._listeners: list[Listener] = []
        self._debounce = Debouncer(self._settings.search_debounce_ms / 1000, clock)
        self.state = ViewState(page_size=self._settings.default_page_size)
        self.view: ListView | None = None

    @property
    def posts(self) -> tuple[PostRecord, ...]:
        return self._posts

    @property
    def filtered(self) -> list[PostRecord]:
        return list(self._filtered)

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def location(self) -> str:
        return self._history.location

    @property
    def search_pending(self) -> bool:
        return self._debounce.pending

    def subscribe(self, listener: Listener) -> None:
        """Register a painter called with every rendered view."""
        self._listeners.append(listener)

    # -- loading -----------------------------------------------------------

    def load(self, records: Any) -> PostCollection:
        """Store the post set for this page load.

        Accepts JSON text, decoded data or a ``PostCollection``. Malformed
        input yields an empty set; this method never raises. The set is
        loaded once: later calls are ignored.
        """
        if self._loaded:
            logger.warning("Posts already loaded; ignoring reload")
            return PostCollection(posts=self._posts)
        try:
            collection = parse_posts(records)
        except Exception as e:
            logger.error("Unexpected error parsing posts: %s", e)
            collection = PostCollection()
        self._posts = collection.posts
        self._loaded = True
        self._recompute()
        return collection

    def init_from_location(self, location: str | None = None) -> ListView:
        """Initialize the state from the query parameters of the page URL."""
        if location is not None:
            self._history.location = location
        self.state = decode_state(self._history.location, self._settings)
        self._recompute()
        return self.render()

    # -- transitions -------------------------------------------------------

    def set_query(self, text: str) -> ListView:
        self._debounce.cancel()
        return self._transition(query=text or "", page=1)

    def set_category(self, value: str) -> ListView:
        return self._transition(category=value or "", page=1)

    def set_page_size(self, n: Any) -> ListView:
        size = self._coerce_int(n)
        if size not in self._settings.page_size_options:
            logger.debug("Invalid page size %r, using smallest option", n)
            size = self._settings.smallest_page_size
        return self._transition(page_size=size, page=1)

    def set_page(self, n: Any) -> ListView:
        page = self._coerce_int(n)
        return self._transition(page=max(1, page))

    def clear(self) -> ListView:
        """Reset the search, the category and the page."""
        self._debounce.cancel()
        return self._transition(query="", category="", page=1)

    # -- debounced search input -------------------------------------------

    def type_query(self, text: str, now: float | None = None) -> None:
        """Record a keystroke; ``set_query`` runs after the quiet period."""
        self._debounce.submit(self.set_query, text, now=now)

    def tick(self, now: float | None = None) -> ListView | None:
        """Apply pending search input if it is due. Returns the new view."""
        if self._debounce.poll(now):
            return self.view
        return None

    def flush(self) -> ListView | None:
        """Apply pending search input immediately."""
        if self._debounce.flush():
            return self.view
        return None

    # -- rendering ---------------------------------------------------------

    def render(self) -> ListView:
        view = render_view(
            self._filtered,
            len(self._posts),
            self.state,
            self._settings,
            location=self._history.location,
        )
        self.view = view
        for listener in self._listeners:
            listener(view)
        return view

    def facets(self) -> FacetIndex:
        return facets(self._posts)

    def filter(
        self, records: list[PostRecord] | tuple[PostRecord, ...], query: str, category: str
    ) -> list[PostRecord]:
        return filter_posts(records, query, category, self._settings.search_fields)

    # -- internals ---------------------------------------------------------

    def _transition(self, **changes: Any) -> ListView:
        self.state = ViewState(**{**self.state.model_dump(), **changes})
        self._recompute()
        self._history.replace_state(
            with_state(self._history.location, self.state, self._settings)
        )
        return self.render()

    def _recompute(self) -> None:
        self._filtered = self.filter(self._posts, self.state.query, self.state.category)
        self._total_pages = total_pages(len(self._filtered), self.state.page_size)
        page = clamp_page(self.state.page, self._total_pages)
        if page != self.state.page:
            self.state = self.state.model_copy(update={"page": page})

    @staticmethod
    def _coerce_int(value: Any) -> int:
        try:
            return int(value)
        except OverflowError:
            # Infinite pages clamp to the nearest edge
            return sys.maxsize if value > 0 else 1
        except (TypeError, ValueError):
            return 1
