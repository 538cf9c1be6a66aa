"""
Storefront API - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the test suite.
How:   The app runs against a seeded MemoryStore injected through
       app.dependency_overrides; no Firestore project is needed.

Fixtures:
    ├── sample_products / sample_categories: seed documents
    ├── memory_store: MemoryStore holding the seed documents
    ├── failing_store: store whose every read raises
    └── test_client: HTTPX AsyncClient bound to the app over ASGI
"""

import os

# Must be set before storefront.config is imported
os.environ["STORE_BACKEND"] = "memory"
os.environ["SEED_FILE"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront.services.memory_store import MemoryStore
from storefront.services.store_base import DocumentStore


@pytest.fixture
def sample_products():
    """
    Products keyed by id. Ascending price order is
    p4 (20), p5 (60), p3 (100), p2 (300), p1 (500); p6 has no price.
    """
    return {
        "p1": {"title": "iPhone", "category": "electronics", "price": 500, "stock": 3},
        "p2": {"title": "Headphone", "category": "electronics", "price": 300},
        "p3": {"title": "Laptop", "category": "electronics", "price": 100},
        "p4": {"title": "T-Shirt", "category": "clothing", "price": 20},
        "p5": {"title": "Jeans", "category": "clothing", "price": 60},
        "p6": {"title": "Mystery box", "category": "misc"},
    }


@pytest.fixture
def sample_categories():
    return {
        "electronics": {"name": "Electronics", "icon": "chip"},
        "clothing": {"name": "Clothing"},
    }


@pytest.fixture
def memory_store(sample_products, sample_categories):
    return MemoryStore({"products": sample_products, "categories": sample_categories})


@pytest.fixture
def failing_store():
    """A store whose reads fail the way an unreachable backend would."""
    store = MagicMock(spec=DocumentStore)
    store.name = "failing"
    store.stream = AsyncMock(side_effect=ConnectionError("backend unreachable"))
    store.run_query = AsyncMock(side_effect=ConnectionError("backend unreachable"))
    store.health_check = AsyncMock(return_value=False)
    return store


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    HTTPX AsyncClient talking to the app with the store dependency overridden.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from storefront.database import get_store
    from storefront.main import app

    app.dependency_overrides[get_store] = lambda: memory_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
