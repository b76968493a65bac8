"""Search and category filtering over the loaded posts."""

from collections import Counter
from collections.abc import Iterable, Sequence

from postindex.models.post import PostRecord
from postindex.models.view import ALL_CATEGORIES, Facet, FacetIndex

DEFAULT_SEARCH_FIELDS = ("title",)


def _searchable_text(post: PostRecord, fields: Iterable[str]) -> list[str]:
    texts: list[str] = []
    for name in fields:
        value = getattr(post, name)
        if isinstance(value, tuple):
            texts.extend(value)
        else:
            texts.append(value)
    return [t.lower() for t in texts]


def matches_query(
    post: PostRecord, query: str, fields: Iterable[str] = DEFAULT_SEARCH_FIELDS
) -> bool:
    """Case-insensitive substring match of *query* against the given fields."""
    q = query.strip().lower()
    if not q:
        return True
    return any(q in text for text in _searchable_text(post, fields))


def matches_category(post: PostRecord, category: str) -> bool:
    """Exact case-insensitive match of *category* against categories or tags."""
    cat = category.strip().lower()
    if not cat or cat == ALL_CATEGORIES:
        return True
    return any(label.lower() == cat for label in post.labels())


def filter_posts(
    posts: Sequence[PostRecord],
    query: str = "",
    category: str = "",
    fields: Iterable[str] = DEFAULT_SEARCH_FIELDS,
) -> list[PostRecord]:
    """Return the posts matching both the search query and the category.

    Empty predicates match everything. Order of *posts* is preserved, so
    filtering an already filtered list with the same arguments is a no-op.
    """
    fields = tuple(fields)
    return [
        p
        for p in posts
        if matches_query(p, query, fields) and matches_category(p, category)
    ]


def facets(posts: Sequence[PostRecord]) -> FacetIndex:
    """Unique sorted categories and tags with post counts."""
    categories: Counter[str] = Counter()
    tags: Counter[str] = Counter()
    for post in posts:
        # Count each label once per post
        categories.update(set(post.categories))
        tags.update(set(post.tags))
    return FacetIndex(
        categories=[Facet(name=k, count=categories[k]) for k in sorted(categories)],
        tags=[Facet(name=k, count=tags[k]) for k in sorted(tags)],
    )
