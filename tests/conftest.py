"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from podcast_catalog.api import create_app
from podcast_catalog.config import Settings
from podcast_catalog.service import CatalogService
from podcast_catalog.storage import CatalogStore


@pytest.fixture
def store():
    """Empty in-memory catalog store."""
    catalog_store = CatalogStore("sqlite://")
    catalog_store.create_all()
    yield catalog_store
    catalog_store.close()


@pytest.fixture
def service(store) -> CatalogService:
    return CatalogService(store)


@pytest.fixture
def client():
    """TestClient running the full app against a fresh in-memory database."""
    app = create_app(settings=Settings(debug=False), store=CatalogStore("sqlite://"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_podcast_data() -> dict:
    return {"title": "testTitle", "category": "testCategory"}


@pytest.fixture
def sample_episode_data() -> dict:
    return {"title": "testEpisodeTitle", "category": "testEpisodeCategory"}
