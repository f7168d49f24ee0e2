"""
Pytest configuration and fixtures.
Provides test app client and an in-memory SQLite connection manager.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient

from resource_api.db import session as db_session
from resource_api.db.session import ConnectionManager, ConnectionScope, create_tables
from resource_api.main import app


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def connection_manager():
    """
    Install a fresh in-memory database as the global connection manager.
    """
    manager = ConnectionManager({"default": TEST_DATABASE_URL})
    previous = db_session.connection_manager
    db_session.connection_manager = manager
    
    await create_tables()
    
    yield manager
    
    await manager.dispose()
    db_session.connection_manager = previous


@pytest.fixture(scope="function")
async def connections(connection_manager):
    """Request-style connection scope over the test database."""
    scope = ConnectionScope(connection_manager)
    yield scope
    await scope.close()


@pytest.fixture(scope="function")
async def test_client(connection_manager):
    """
    Create a test HTTP client.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
