"""
Test configuration for the 5S tracker tests.

sys.path gets the repository root so 'from fives...' resolves whether pytest
runs from the repo root or from fives/.

Every test gets its own in-memory SQLite database (aiosqlite), created from
Base.metadata and seeded with the default life-area catalog. The app's get_db
dependency is overridden to use it, so no Postgres and no Alembic run is needed;
httpx's ASGITransport does not trigger the lifespan hook.
"""
import os
import sys
from datetime import date
from pathlib import Path

_project_root = Path(__file__).parent.parent.parent   # .../repo root

if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

# Must be set before fives.config builds the settings singleton
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DEBUG", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import fives.models  # noqa: F401  registers every table on Base.metadata
from fives.client.gateway import PersistenceGateway
from fives.database import Base, build_engine, build_session_factory, get_db
from fives.main import app
from fives.store import seed_life_areas

# Fixed "today" for tests that depend on the calendar (a Wednesday)
TODAY = date(2024, 1, 10)
SESSION_A = "session_1704844800000_abc123def4567"
SESSION_B = "session_1704844800001_zyx987wvu6543"


def session_headers(session_id: str = SESSION_A) -> dict[str, str]:
    return {"X-Session-Id": session_id}


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = build_session_factory(engine)
    async with factory() as session:
        await seed_life_areas(session)
        await session.commit()

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db(session_factory):
    """A bare AsyncSession for store-level tests. Do not mix with `client`."""
    async with session_factory() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client(session_factory):
    """Async httpx client using ASGI transport — no live server needed."""

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def areas(client) -> dict[str, dict]:
    """Life-area catalog keyed by slug."""
    response = await client.get("/api/areas")
    assert response.status_code == 200, response.text
    return {area["name"]: area for area in response.json()}


@pytest_asyncio.fixture
async def onboarded(client, areas) -> dict:
    """SESSION_A onboarded on 'work' for TODAY. Returns the progress body."""
    response = await client.post(
        "/api/onboarding",
        json={"area_id": areas["work"]["id"], "on": TODAY.isoformat()},
        headers=session_headers(),
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def make_gateway(client):
    """Build a PersistenceGateway that talks to the ASGI app through `client`."""

    def _make(session_id: str = SESSION_A) -> PersistenceGateway:
        return PersistenceGateway(session_id, client=client)

    return _make
