"""Posts index endpoints.

Each request is one page load: the request's query string is the page
location and the posts loaded at startup are the embedded data.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from postindex.config import get_settings
from postindex.models.post import PostCollection
from postindex.models.view import FacetIndex, ListView
from postindex.services.controller import ListController
from postindex.services.filtering import facets
from postindex.services.location import History
from postindex.services.markup import paint

router = APIRouter(prefix="/posts", tags=["posts"])
logger = logging.getLogger(__name__)


def get_posts(request: Request) -> PostCollection:
    """The post set loaded at startup (empty if loading failed)."""
    return getattr(request.app.state, "posts", None) or PostCollection()


def _controller_for(request: Request) -> ListController:
    location = request.url.path
    if request.url.query:
        location += f"?{request.url.query}"
    controller = ListController(settings=get_settings(), history=History(location))
    controller.load(get_posts(request))
    view = controller.init_from_location()
    logger.info(
        "Rendered %s: page %d of %d, %d of %d posts",
        location,
        view.state.page,
        view.total_pages,
        view.filtered,
        view.total,
    )
    return controller


@router.get("", response_model=ListView)
async def list_posts(request: Request):
    """Render the posts list for the ``q``, ``c``, ``p`` and ``n`` parameters.

    Invalid parameters are clamped or defaulted rather than rejected.
    """
    return _controller_for(request).view


@router.get("/fragment", response_class=HTMLResponse)
async def list_posts_fragment(request: Request):
    """Render the posts list as an HTML fragment."""
    view = _controller_for(request).view
    return HTMLResponse(content=paint(view))


@router.get("/facets", response_model=FacetIndex)
async def list_facets(request: Request):
    """Categories and tags with post counts, for the filter dropdown."""
    return facets(get_posts(request).posts)
