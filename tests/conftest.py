"""Shared fixtures for Storno MCP tests."""

import os

import pytest
import pytest_asyncio

from helpers import BASE_URL
from storno_mcp.client import SessionStore, StornoClient
from storno_mcp.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer STORNO_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("STORNO_") or key == "LOG_LEVEL":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config() -> Config:
    return Config(
        base_url=BASE_URL,
        token="jwt-token",
        refresh_token="refresh-1",
        company_id="company-1",
    )


@pytest.fixture
def store(config) -> SessionStore:
    return SessionStore(config)


@pytest.fixture
def anonymous_store() -> SessionStore:
    return SessionStore(Config(base_url=BASE_URL))


@pytest_asyncio.fixture
async def client(store):
    client = StornoClient(store)
    yield client
    await client.close_session()


@pytest_asyncio.fixture
async def anonymous_client(anonymous_store):
    client = StornoClient(anonymous_store)
    yield client
    await client.close_session()
