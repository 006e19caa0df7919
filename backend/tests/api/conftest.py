"""API test fixtures - FastAPI app driven through httpx ASGITransport.

Invariants:
    - get_transaction_service overridden with a fixed-clock service per test
    - dependency_overrides cleared after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from transaction_api.api.dependencies import get_transaction_service
from transaction_api.main import app
from transaction_api.services.transaction_service import TransactionService


@pytest.fixture
def override_service():
    """Install a TransactionService (or fake) for the duration of a test."""
    def _install(service) -> None:
        app.dependency_overrides[get_transaction_service] = lambda: service
    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
async def client(registry, now, override_service):
    override_service(TransactionService(registry, clock=lambda: now))
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def raw_client(override_service):
    """Client that turns unhandled app exceptions into responses (500 path)."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
