"""Display formatting for list entries."""

from datetime import datetime

from postindex.models.post import PostRecord
from postindex.models.view import Chip, PostEntry

NO_POSTS_MESSAGE = "No posts found."


def format_date(iso: str) -> str:
    """Short human date such as ``Mar 5, 2024``; the raw string if unparseable."""
    if not iso:
        return ""
    try:
        dt = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except ValueError:
        return iso
    return f"{dt:%b} {dt.day}, {dt.year}"


def chips_for(post: PostRecord) -> list[Chip]:
    """Category chips followed by ``#``-prefixed tag chips."""
    chips = [Chip(label=c, kind="category", title="Category") for c in post.categories]
    chips.extend(Chip(label=f"#{t}", kind="tag", title="Tag") for t in post.tags)
    return chips


def to_entry(post: PostRecord) -> PostEntry:
    return PostEntry(
        title=post.title,
        url=post.url,
        date=post.date,
        date_display=format_date(post.date),
        excerpt=post.excerpt,
        chips=chips_for(post),
    )


def results_summary(total: int, range_from: int, range_to: int) -> str:
    """``"N posts found"`` plus the visible range when there are results."""
    summary = f"{total} posts found"
    if total:
        summary += f" · showing {range_from}–{range_to}"
    return summary
