"""
Pytest fixtures for a fresh engine and an HTTP client bound to it.

Every test gets its own in-memory engine, so no state leaks between tests.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from courtbook.core.config import Settings
from courtbook.main import app
from courtbook.services.engine_factory import BookingEngine, build_engine, get_engine


@pytest.fixture
def settings() -> Settings:
    return Settings(BOOKING_STORE="memory", SIMULATED_LATENCY_MS=0)


@pytest.fixture
def engine(settings: Settings) -> BookingEngine:
    return build_engine(settings)


@pytest_asyncio.fixture(scope="function")
async def client(engine: BookingEngine) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests all see the test's engine."""
    app.dependency_overrides[get_engine] = lambda: engine

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def other_member(client: AsyncClient) -> dict:
    """A second member, returned as request headers."""
    response = await client.post("/api/v1/auth/signup", json={
        "name": "Bob Member",
        "email": "bob@test.com",
        "role": "member",
    })
    assert response.status_code == 201
    return {"X-User-Id": response.json()["id"]}
