"""
Todo REST Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── store: In-memory TodoStore
    ├── persistent_store: TodoStore mirrored to a CSV file under tmp_path
    ├── service: TodoService over `store`
    ├── sample_todo: A Todo with every field set
    ├── test_client: HTTPX AsyncClient for a fresh app over `store`
    └── persistent_client: Same, over `persistent_store`
"""

import os

# Override settings for testing BEFORE any app imports
# Why: The default app must never touch a real data.csv during tests
os.environ["FILE_PERSISTENCE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from todo_api.models.todo import Todo
from todo_api.services.todo_service import TodoService
from todo_api.services.todo_store import TodoStore


@pytest.fixture
def store():
    """A fresh in-memory store (persistence off)."""
    return TodoStore()


@pytest.fixture
def data_file(tmp_path):
    """Path of the CSV data file used by persistent fixtures (not created yet)."""
    return tmp_path / "data.csv"


@pytest.fixture
def persistent_store(data_file):
    """A store that mirrors every save to `data_file`."""
    return TodoStore(data_file=str(data_file), file_persistence=True)


@pytest.fixture
def service(store):
    return TodoService(store)


@pytest.fixture
def sample_todo():
    """
    Provides a Todo with every field populated.

    The id is deliberately not "0" so tests can see the store overwrite it.
    """
    return Todo(id="99", title="Test1", description="Beschrieb", terminated=False)


def _client_for(store) -> AsyncClient:
    from todo_api.main import create_app
    app = create_app(store=store)
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient talking to a fresh app backed by `store`.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/todos")
            assert response.status_code == 200
    """
    async with _client_for(store) as client:
        yield client


@pytest_asyncio.fixture
async def persistent_client(persistent_store):
    """HTTPX AsyncClient for an app whose store writes to the tmp data file."""
    async with _client_for(persistent_store) as client:
        yield client
