"""
Test configuration and fixtures.

Provides:
- In-memory SQLite engine (aiosqlite) with all tables created per test
- A fake identity verifier mapping fixed tokens to two agents
- HTTPX AsyncClient over ASGITransport with get_db / verifier overridden
"""
import os
from typing import AsyncGenerator, Dict

# Settings are read at import time; point them at SQLite before app imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("AUTH_VERIFY_MODE", "remote")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from main import create_application
from reviewdesk.core.exceptions import InvalidTokenError
from reviewdesk.db.session import build_engine, build_session_factory, get_db
from reviewdesk.models import Base
from reviewdesk.services.identity_service import Identity, get_identity_verifier
from reviewdesk.services.user_service import UserService


ALICE = Identity(
    id="0b7e5a52-3f1c-4a8e-9d2b-6c1f0e4a7b11",
    email="alice@example.com",
    name="Alice Agent",
)
BOB = Identity(
    id="9a3d2c61-8e4f-4b57-a1c9-2d6e8f0b3c22",
    email="bob@example.com",
    name="Bob Broker",
)

TOKENS: Dict[str, Identity] = {
    "alice-token": ALICE,
    "bob-token": BOB,
}


def bearer(token: str = "alice-token") -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class FakeIdentityVerifier:
    """Stands in for the identity provider: known tokens only."""

    def __init__(self, identities: Dict[str, Identity]) -> None:
        self.identities = dict(identities)
        self.calls = 0

    async def verify(self, token: str) -> Identity:
        self.calls += 1
        try:
            return self.identities[token]
        except KeyError:
            raise InvalidTokenError()


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    # StaticPool keeps the single in-memory database alive across sessions
    test_engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session for service-level tests, with both agents mirrored."""
    session_factory = build_session_factory(engine)
    async with session_factory() as session:
        await UserService.ensure_user(session, ALICE)
        await UserService.ensure_user(session, BOB)
        await session.commit()
        yield session


# =============================================================================
# App / Client Fixtures
# =============================================================================

@pytest.fixture
def verifier() -> FakeIdentityVerifier:
    return FakeIdentityVerifier(TOKENS)


@pytest.fixture
def app(engine: AsyncEngine, verifier: FakeIdentityVerifier):
    application = create_application()
    session_factory = build_session_factory(engine)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_identity_verifier] = lambda: verifier
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def new_client(client: AsyncClient):
    """Factory: create a client over the API and return its JSON."""

    async def _create(token: str = "alice-token", **overrides) -> dict:
        payload = {
            "name": "Jane Doe",
            "email": "jane@example.com",
            "clientType": "buyer",
            "propertyType": "condo",
        }
        payload.update(overrides)
        response = await client.post("/api/clients", json=payload, headers=bearer(token))
        assert response.status_code == 201, response.text
        return response.json()

    return _create
