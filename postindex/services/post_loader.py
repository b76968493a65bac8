"""Loading the posts index from JSON text, files or a remote URL.

Every entry point degrades to an empty ``PostCollection`` on bad input: the
posts page must render an empty list rather than fail.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from postindex.models.post import PostCollection, PostRecord
from postindex.services.http_client import get_shared_client

logger = logging.getLogger(__name__)

EMPTY = PostCollection()


def parse_posts(data: Any) -> PostCollection:
    """Build a ``PostCollection`` from JSON text/bytes or decoded data.

    Accepts a list of post objects or a mapping with a ``posts`` list.
    Records that fail validation are skipped; anything else malformed gives
    an empty collection.
    """
    if isinstance(data, PostCollection):
        return data
    if isinstance(data, (str, bytes, bytearray)):
        if not data.strip():
            return EMPTY
        try:
            data = json.loads(data)
        except (ValueError, UnicodeDecodeError, RecursionError) as e:
            logger.warning("Posts data is not valid JSON: %s", e)
            return EMPTY

    # Handle both list format and dict format ({"posts": [...]})
    if isinstance(data, dict):
        data = data.get("posts", [])
    if not isinstance(data, (list, tuple)):
        logger.warning("Posts data is not a list (got %s)", type(data).__name__)
        return EMPTY

    posts: list[PostRecord] = []
    skipped = 0
    for i, item in enumerate(data):
        if isinstance(item, PostRecord):
            posts.append(item)
            continue
        if not isinstance(item, dict):
            skipped += 1
            logger.warning("Skipping post %d: not an object", i)
            continue
        try:
            posts.append(PostRecord.model_validate(item))
        except ValidationError as e:
            skipped += 1
            logger.warning("Skipping post %d: %s", i, e.errors()[0]["msg"])
    return PostCollection(posts=tuple(posts), skipped=skipped)


def load_posts_file(path: str | Path) -> PostCollection:
    """Read and parse a posts JSON file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Posts file not found: %s", path)
        return EMPTY
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read posts file %s: %s", path, e)
        return EMPTY
    return parse_posts(text)


async def fetch_posts(url: str) -> PostCollection:
    """Fetch and parse a remote posts JSON document."""
    client = get_shared_client()
    try:
        resp = await client.get(url)
    except httpx.HTTPError as e:
        logger.warning("Failed to fetch posts from %s: %s", url, e)
        return EMPTY
    if resp.status_code != 200:
        logger.warning("Posts source %s returned %d", url, resp.status_code)
        return EMPTY
    return parse_posts(resp.content)


async def load_posts_source(source: str) -> PostCollection:
    """Load posts from an http(s) URL or a filesystem path."""
    if source.startswith(("http://", "https://")):
        posts = await fetch_posts(source)
    else:
        posts = load_posts_file(source)
    logger.info(
        "Loaded %d posts from %s (%d skipped)", len(posts), source, posts.skipped
    )
    return posts
