"""
Blog Backend - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── store:        BlogStore on a private in-memory SQLite database, tables created
    ├── test_client:  HTTPX AsyncClient talking to an app built around `store`
    ├── mock_store:   AsyncMock standing in for BlogStore (service unit tests)
    └── seeded:       a category with two posts plus one uncategorized post
"""

import os

# Settings are read at import time; point them at SQLite before any app import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CREATE_SCHEMA_ON_STARTUP"] = "false"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.services.store import BlogStore  # noqa: E402


@pytest_asyncio.fixture
async def store():
    """
    A real store on in-memory SQLite, with foreign keys enforced.

    Every test gets its own engine, so nothing leaks between tests.
    """
    blog_store = BlogStore.from_url("sqlite+aiosqlite://")
    await blog_store.create_schema()
    yield blog_store
    await blog_store.dispose()


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import create_app

    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_store():
    """BlogStore stand-in; set return values per test with StoreResult objects."""
    return AsyncMock(spec=BlogStore)


@pytest_asyncio.fixture
async def seeded(test_client):
    """
    Creates, through the API:
        category "Python" with posts "First" (published) and "Second"
        post "Loose" with no category
    Returns the created JSON objects keyed by name.
    """
    category = (
        await test_client.post(
            "/api/categories", json={"name": "Python", "description": "Snakes"}
        )
    ).json()
    first = (
        await test_client.post(
            "/api/posts",
            json={"title": "First", "content": "Hello", "published": True, "categoryId": category["id"]},
        )
    ).json()
    second = (
        await test_client.post(
            "/api/posts", json={"title": "Second", "categoryId": str(category["id"])}
        )
    ).json()
    loose = (await test_client.post("/api/posts", json={"title": "Loose"})).json()
    return {"category": category, "first": first, "second": second, "loose": loose}
