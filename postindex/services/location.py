"""Round trip of the view state through the URL query string."""

import logging
import re
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from postindex.config import Settings, get_settings
from postindex.models.view import ViewState

logger = logging.getLogger(__name__)

QUERY_PARAM = "q"
CATEGORY_PARAM = "c"
PAGE_PARAM = "p"
PAGE_SIZE_PARAM = "n"

_URL_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _query_string(location: str) -> str:
    """Accept a full URL, a path with a query, or a bare query string."""
    if location.startswith(("/", "?")) or _URL_SCHEME_RE.match(location):
        return urlsplit(location).query
    return location


def decode_state(location: str, settings: Settings | None = None) -> ViewState:
    """Read a ``ViewState`` from the query parameters of *location*.

    Missing parameters take their defaults. A page that is not a positive
    integer becomes 1; a page size outside the enumerated options becomes the
    smallest option. The upper page bound depends on the loaded posts and is
    applied by the controller.
    """
    settings = settings or get_settings()
    params = parse_qs(_query_string(location), keep_blank_values=True)

    def first(name: str) -> str | None:
        values = params.get(name)
        return values[0] if values else None

    page = _parse_int(first(PAGE_PARAM))
    if page is None or page < 1:
        if first(PAGE_PARAM) is not None:
            logger.debug("Ignoring invalid page parameter %r", first(PAGE_PARAM))
        page = 1

    raw_size = first(PAGE_SIZE_PARAM)
    if raw_size is None:
        page_size = settings.default_page_size
    else:
        page_size = _parse_int(raw_size) or 0
        if page_size not in settings.page_size_options:
            logger.debug("Ignoring invalid page size parameter %r", raw_size)
            page_size = settings.smallest_page_size

    return ViewState(
        query=first(QUERY_PARAM) or "",
        category=first(CATEGORY_PARAM) or "",
        page=page,
        page_size=page_size,
    )


def encode_state(state: ViewState, settings: Settings | None = None) -> str:
    """Query string for *state*, omitting parameters at their default."""
    settings = settings or get_settings()
    params: dict[str, str] = {}
    if state.query:
        params[QUERY_PARAM] = state.query
    if state.category:
        params[CATEGORY_PARAM] = state.category
    if state.page != 1:
        params[PAGE_PARAM] = str(state.page)
    if state.page_size != settings.default_page_size:
        params[PAGE_SIZE_PARAM] = str(state.page_size)
    return urlencode(params)


def with_state(location: str, state: ViewState, settings: Settings | None = None) -> str:
    """Replace the query string of *location* with the encoded *state*."""
    parts = urlsplit(location)
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, encode_state(state, settings), "")
    )


class History:
    """In-memory stand-in for the browser history.

    ``replace_state`` swaps the current entry without navigating, so it only
    records the URL.
    """

    def __init__(self, location: str = "/") -> None:
        self.location = location
        self.writes = 0

    def replace_state(self, url: str) -> None:
        self.location = url
        self.writes += 1
