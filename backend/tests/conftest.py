"""
Pytest configuration and fixtures for SimpleGrid backend tests.
"""

from __future__ import annotations

import os

import httpx
import pytest_asyncio

# Pin grid defaults before importing config so the tests see known page sizes
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["GRID_MAX_ROWS"] = "500"
os.environ["GRID_ROWS_PER_PAGE"] = "10"
os.environ["GRID_ROWS_PER_PAGE_OPTIONS"] = "10,25,50"

from backend.main import app  # noqa: E402


@pytest_asyncio.fixture(loop_scope="session")
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
