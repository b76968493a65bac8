"""HTML painting of a rendered ``ListView``.

Produces the two fragments the posts page swaps in: the list of post items
and the pagination strip. All post data is escaped.
"""

from html import escape

from postindex.models.view import ListView, PageControl, PostEntry


def _entry_html(entry: PostEntry) -> str:
    chips = "".join(
        f'<span class="chip" title="{escape(c.title)}">{escape(c.label)}</span>'
        for c in entry.chips
    )
    chips_html = f'<div class="chips">{chips}</div>' if chips else ""
    excerpt_html = (
        f'<div class="post-excerpt">{escape(entry.excerpt)}</div>'
        if entry.excerpt
        else ""
    )
    return (
        '<div class="post-item">'
        f'<div class="post-title"><a href="{escape(entry.url)}">{escape(entry.title)}</a></div>'
        f'<div class="post-meta">{escape(entry.date_display)}</div>'
        f"{excerpt_html}"
        f"{chips_html}"
        "</div>"
    )


def _button_html(control: PageControl) -> str:
    css = ""
    if control.disabled:
        css = ' class="disabled"'
    elif control.active:
        css = ' class="active"'
    disabled = " disabled" if control.disabled else ""
    return (
        f'<button data-page="{control.page}"{css}{disabled}>'
        f"{escape(control.label)}</button>"
    )


def paint_list(view: ListView) -> str:
    if view.empty_message is not None:
        return f'<div class="empty">{escape(view.empty_message)}</div>'
    return "".join(_entry_html(e) for e in view.entries)


def paint_pagination(view: ListView) -> str:
    return "".join(_button_html(c) for c in view.controls)


def paint(view: ListView) -> str:
    """Results summary, list and pagination strip as one fragment."""
    return (
        f'<div id="results-meta">{escape(view.summary)}</div>'
        f'<div id="posts-list">{paint_list(view)}</div>'
        f'<nav id="pagination">{paint_pagination(view)}</nav>'
    )
