"""Shared pytest fixtures for MockSwift tests.

Each test gets a fresh store and app so state never leaks between tests.
Auth is disabled for the handler tests; test_auth.py builds its own app
with auth enabled.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from mockswift.config import AuthConfig, MockSwiftConfig, ServerConfig
from mockswift.server import create_app, create_store
from mockswift.storage import SwiftStore


@pytest.fixture
def config() -> MockSwiftConfig:
    """Create a test config with auth disabled."""
    return MockSwiftConfig(
        server=ServerConfig(host="127.0.0.1", port=0),
        auth=AuthConfig(enabled=False, account="test", password="test"),
    )


@pytest.fixture
def store(config: MockSwiftConfig) -> SwiftStore:
    """A store seeded with the 'test' account."""
    return create_store(config)


@pytest.fixture
def app(config: MockSwiftConfig, store: SwiftStore):
    return create_app(config, store=store)


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async test client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
