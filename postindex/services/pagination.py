"""Page arithmetic and the pagination control strip."""

import math

from postindex.models.view import PageControl


def total_pages(count: int, page_size: int) -> int:
    """Number of pages for *count* items, never less than one."""
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def page_window(current: int, pages: int, size: int = 5) -> range:
    """Up to *size* page numbers centered on *current*.

    The window shifts to stay within ``[1, pages]`` near either edge.
    """
    half = size // 2
    start = max(1, current - half)
    end = min(pages, start + size - 1)
    start = max(1, min(start, end - size + 1))
    return range(start, end + 1)


def page_controls(current: int, pages: int, size: int = 5) -> list[PageControl]:
    """Prev, the numbered window, then Next.

    Prev and Next are always present and disabled at the edges.
    """
    controls = [PageControl(label="Prev", page=current - 1, disabled=current <= 1)]
    for number in page_window(current, pages, size):
        controls.append(
            PageControl(label=str(number), page=number, active=number == current)
        )
    controls.append(
        PageControl(label="Next", page=current + 1, disabled=current >= pages)
    )
    return controls


def page_bounds(page: int, page_size: int, count: int) -> tuple[int, int]:
    """Slice indices ``(start, stop)`` of *page* within *count* items."""
    start = (page - 1) * page_size
    return start, min(start + page_size, count)
