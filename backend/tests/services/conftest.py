"""Service test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - Disaster types 1..3 seeded for every test (Flood, Earthquake, Fire)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Requests authenticate through the identity header, like the gateway does
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from disaster_api.db.base import Base
from disaster_api.infrastructure.database import get_db, DatabaseSessionManager
from disaster_api.models.disaster import DisasterLocation
from disaster_api.models.disaster_type import DisasterType
from disaster_api.models.disaster_type_link import DisasterTypeLink
import disaster_api.infrastructure.database as db_module
from disaster_api.main import app
from tests.services.disaster_factories import OWNER_ID


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def disaster_types(test_db):
    types = [
        DisasterType(id=1, name="Flood"),
        DisasterType(id=2, name="Earthquake"),
        DisasterType(id=3, name="Fire"),
    ]
    test_db.add_all(types)
    await test_db.commit()
    return types


@pytest.fixture
async def client(test_engine, test_session_factory, disaster_types):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_disaster(test_db, disaster_types):
    """A location owned by OWNER_ID, paired with types 1 (count 4) and 2 (count 0)."""
    disaster = DisasterLocation(
        user_id=OWNER_ID, latitude="10.5", longitude="20.25",
        address="9 River Rd", city="Lowtown", postal_code="54321",
        description="recurring flooding",
    )
    disaster.type_links = [
        DisasterTypeLink(disaster_type_id=1, count=4),
        DisasterTypeLink(disaster_type_id=2),
    ]
    test_db.add(disaster)
    await test_db.commit()
    return disaster
