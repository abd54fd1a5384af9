"""
Pytest configuration: temporary SQLite database + ASGI client per test.
"""

import os

# Never touch a real database from tests
os.environ["DATABASE_URL"] = ""
os.environ["DATABASE_URL_FALLBACK"] = "sqlite+aiosqlite:///:memory:"

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from backend.app import app
from backend.database import enable_sqlite_foreign_keys, get_session, init_db
from cityscape import Entity, RelationInput


@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    enable_sqlite_foreign_keys(eng)
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def client(session_factory):
    async def _override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def create_company(client, name, **fields):
    resp = await client.post("/api/companies", json={"company_name": name, **fields})
    assert resp.status_code == 201, resp.text
    return resp.json()["companyId"]


async def create_relationship(client, c1, c2, rtype, **fields):
    resp = await client.post(
        "/api/relationships",
        json={"company1_id": c1, "company2_id": c2, "relationship_type": rtype, **fields},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["relationshipId"]


@pytest.fixture
def focus():
    return Entity(id=1, name="Focus Corp", category="alpha-tower")


@pytest.fixture
def partner_scenario():
    """Two Partners (0.8, 0.2) and one Competitor without strength."""
    return [
        RelationInput(other=Entity(id=2, name="B"), category="Partner", strength=0.8),
        RelationInput(other=Entity(id=3, name="C"), category="Partner", strength=0.2),
        RelationInput(other=Entity(id=4, name="D"), category="Competitor", strength=None),
    ]
