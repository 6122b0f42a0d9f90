# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Builds applications with an explicit Settings object (no .env)
# - Provides an /api router whose endpoints exercise the error handling,
#   body parsing and cookie parsing of the bootstrap
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

# A developer's shell settings must not change what the tests build
for name in ("PORT", "HOST", "MONGODB_URI", "CORS_ORIGINS", "API_ROUTER"):
    os.environ.pop(name, None)

import pytest
from fastapi import APIRouter, HTTPException, Request
from fastapi.testclient import TestClient

from app.body import ParsedBody
from app.config import Settings
from app.dependencies import DatabaseDep
from app.exceptions import HTTPError, InternalServerError
from app.main import create_app

COOKIE_SECRET = "test-cookie-secret"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def static_root(tmp_path):
    """Static directory with one public file and one hidden file."""
    root = tmp_path / "public"
    uploads = root / "uploads"
    uploads.mkdir(parents=True)
    (uploads / "cover.txt").write_text("cover image")
    (root / ".env").write_text("MONGODB_URI=mongodb://secret")
    return root


@pytest.fixture
def settings(static_root):
    """Settings for an app without a database URI."""
    return Settings(
        _env_file=None,
        MONGODB_URI=None,
        COOKIE_PARSER_SECRET_KEY=COOKIE_SECRET,
        STATIC_ROOT=static_root,
        BODY_LIMIT_BYTES=1024,
    )


@pytest.fixture
def api_router():
    """Stand-in for the blog router mounted at /api."""
    router = APIRouter()

    @router.get("/forbidden")
    async def forbidden():
        raise HTTPError(403, "Forbidden")

    @router.get("/http-exception")
    async def http_exception():
        raise HTTPException(status_code=409, detail="Slug already taken")

    @router.get("/crash")
    async def crash():
        raise RuntimeError()

    @router.get("/empty-error")
    async def empty_error():
        raise InternalServerError("")

    @router.get("/items/{item_id}")
    async def get_item(item_id: int):
        return {"id": item_id}

    @router.post("/echo")
    async def echo(body: ParsedBody):
        return {"body": body}

    @router.get("/cookies")
    async def cookies(request: Request):
        return {
            "cookies": request.state.cookies,
            "signed": request.state.signed_cookies,
        }

    @router.get("/posts")
    async def list_posts(db: DatabaseDep):
        return {"collection": db["posts"].name}

    return router


@pytest.fixture
def client(settings, api_router):
    """TestClient running the full lifespan; server errors become responses."""
    app = create_app(settings, api_router=api_router)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
