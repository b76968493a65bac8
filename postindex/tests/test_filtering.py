"""Tests for search and category filtering."""

from postindex.models.post import PostRecord
from postindex.services.filtering import facets, filter_posts, matches_category


def _post(title="", categories=(), tags=(), excerpt=""):
    return PostRecord(
        title=title, categories=categories, tags=tags, excerpt=excerpt
    )


POSTS = [
    _post("Vector clocks explained", categories=["distributed"], tags=["time"]),
    _post("Lock-free queues", categories=["Concurrency"]),
    _post("Intro to async", tags=["concurrency101"]),
    _post("VECTOR databases", tags=["concurrency"], excerpt="embeddings"),
    _post("Garbage collection", excerpt="a vector of roots"),
]


def test_empty_predicates_match_everything():
    assert filter_posts(POSTS) == POSTS
    assert filter_posts(POSTS, "  ", "") == POSTS


def test_query_is_case_insensitive_title_substring():
    result = filter_posts(POSTS, query="vector")
    assert [p.title for p in result] == [
        "Vector clocks explained",
        "VECTOR databases",
    ]


def test_query_ignores_excerpt_by_default():
    result = filter_posts(POSTS, query="roots")
    assert result == []


def test_query_searches_extra_fields_when_configured():
    result = filter_posts(POSTS, query="vector", fields=["title", "excerpt"])
    assert len(result) == 3
    result = filter_posts(POSTS, query="TIME", fields=["tags"])
    assert [p.title for p in result] == ["Vector clocks explained"]


def test_category_matches_categories_or_tags_exactly():
    result = filter_posts(POSTS, category="concurrency")
    assert [p.title for p in result] == ["Lock-free queues", "VECTOR databases"]


def test_category_does_not_match_substrings():
    assert not matches_category(POSTS[2], "concurrency")
    assert matches_category(POSTS[2], "Concurrency101")


def test_all_category_matches_everything():
    assert filter_posts(POSTS, category="all") == POSTS
    assert filter_posts(POSTS, category="ALL") == POSTS


def test_query_and_category_are_anded():
    result = filter_posts(POSTS, query="vector", category="concurrency")
    assert [p.title for p in result] == ["VECTOR databases"]


def test_filter_is_idempotent():
    once = filter_posts(POSTS, query="e", category="concurrency")
    twice = filter_posts(once, query="e", category="concurrency")
    assert once == twice


def test_facets_are_sorted_and_counted_once_per_post():
    posts = [
        _post(categories=["b", "a", "a"], tags=["x"]),
        _post(categories=["a"]),
    ]
    index = facets(posts)
    assert [(f.name, f.count) for f in index.categories] == [("a", 2), ("b", 1)]
    assert [(f.name, f.count) for f in index.tags] == [("x", 1)]
