"""
Fixtures for integration tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from pickem.core.dependencies import get_leaderboard_service
from pickem.main import create_app


@pytest.fixture
def app(monkeypatch):
    """App with a dummy Mongo URI; the store is overridden per test."""
    from pickem.core.config import get_settings

    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017")
    get_settings.cache_clear()
    yield create_app()
    get_settings.cache_clear()


@pytest.fixture
def use_service(app):
    """Override the leaderboard service dependency with the given service."""

    def _use(service):
        app.dependency_overrides[get_leaderboard_service] = lambda: service

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    """
    HTTP client for testing API endpoints.

    ASGITransport does not run the lifespan, so no database connection is made.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
