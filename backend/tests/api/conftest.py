"""API test fixtures — an isolated app per test over a tmp data root.

Invariants:
    - Every test gets its own create_app(settings); nothing shared via get_settings()
    - Requests go through httpx ASGITransport (no network, no lifespan)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from docstore.main import create_app


@pytest.fixture
def make_client(make_settings):
    """Factory for clients whose app uses the given settings overrides."""
    def _make(**overrides) -> AsyncClient:
        app = create_app(make_settings(**overrides))
        return AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        )
    return _make


@pytest.fixture
async def client(make_client):
    async with make_client() as c:
        yield c
