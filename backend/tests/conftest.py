"""
Pytest configuration and fixtures for Tagweave backend tests.
"""

from __future__ import annotations

import os

# Set test environment variables before importing config
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx  # noqa: E402
import pytest_asyncio  # noqa: E402

from backend.main import create_app  # noqa: E402


@pytest_asyncio.fixture
async def app():
    """A fresh app per test: own registry, renderer and todo store."""
    return create_app()


@pytest_asyncio.fixture
async def async_client(app):
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
