"""Shared fixtures for postindex tests."""

import pytest

from postindex.models.post import PostRecord


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from postindex.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import postindex.services.http_client as http_mod

    http_mod._client = None

    # 3. Posts loaded onto the app
    from postindex.main import app

    if hasattr(app.state, "posts"):
        del app.state.posts


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from postindex.config import Settings, get_settings

    test_settings = Settings(
        posts_source="test-posts.json",
        page_size_options=[10, 20, 50],
        default_page_size=10,
        page_window=5,
        search_debounce_ms=120,
        search_fields=["title"],
    )

    get_settings.cache_clear()
    monkeypatch.setattr("postindex.config.get_settings", lambda: test_settings)

    # Patch get_settings in all modules that import it directly
    for mod_path in [
        "postindex.main",
        "postindex.routers.posts",
        "postindex.services.controller",
        "postindex.services.http_client",
        "postindex.services.location",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


def _make_post(i: int, **overrides) -> dict:
    """Raw post object as it appears in the posts JSON."""
    post = {
        "title": f"Post {i}",
        "url": f"/posts/post-{i}/",
        "date": f"2024-01-{(i % 28) + 1:02d}T09:00:00Z",
        "categories": [],
        "tags": [],
        "excerpt": "",
    }
    post.update(overrides)
    return post


@pytest.fixture
def raw_posts() -> list[dict]:
    """25 plain posts numbered 1..25."""
    return [_make_post(i) for i in range(1, 26)]


@pytest.fixture
def records(raw_posts) -> list[PostRecord]:
    return [PostRecord(**p) for p in raw_posts]


@pytest.fixture
def make_post():
    """Factory for raw post objects."""
    return _make_post
