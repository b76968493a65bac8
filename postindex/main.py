"""
postindex API

Thin FastAPI service serving the searchable, paginated posts index.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from postindex.config import get_settings
from postindex.middleware import ServiceHeadersMiddleware, install_request_id_logging
from postindex.models.post import PostCollection
from postindex.routers import posts
from postindex.services.http_client import close_shared_client
from postindex.services.post_loader import load_posts_source

logger = logging.getLogger(__name__)

settings = get_settings()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load the posts once, close the HTTP client."""
    app.state.posts = await load_posts_source(get_settings().posts_source)
    yield
    await close_shared_client()


app = FastAPI(
    title="postindex API",
    description="Searchable, paginated index of blog posts",
    version=VERSION,
    lifespan=lifespan,
)

# Request IDs and security headers
app.add_middleware(ServiceHeadersMiddleware)
install_request_id_logging(
    "postindex.routers.posts",
    "postindex.services.post_loader",
    "postindex.services.controller",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Routers
app.include_router(posts.router, prefix="/api")


def _run_health_checks(posts: PostCollection | None) -> dict[str, Any]:
    """Run all health checks, returning the full response body."""
    s = get_settings()
    checks = {
        "config": "ok" if s.posts_source else "fail",
        "posts": "ok" if posts else "fail",
    }
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded, failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    return {
        "status": overall,
        "service": "postindex-api",
        "version": VERSION,
        "checks": checks,
        "post_count": len(posts) if posts else 0,
    }


@app.get("/api/health")
async def health_check(request: Request) -> JSONResponse:
    """Health check verifying the posts were loaded."""
    result = _run_health_checks(getattr(request.app.state, "posts", None))
    return JSONResponse(content=result, status_code=200)
