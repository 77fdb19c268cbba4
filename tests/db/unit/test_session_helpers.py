"""
Session helper Unit Tests

Tests that the db helpers drive both synchronous and async sessions.

Run with:
    pytest tests/db/unit/test_session_helpers.py -v
"""

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from db import Base, session_commit, session_execute, session_flush, session_rollback
from models.foodtruck import Foodtruck


@pytest_asyncio.fixture
async def async_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSession(engine) as session:
        yield session
    await engine.dispose()


async def count_foodtrucks(session) -> int:
    result = await session_execute(select(Foodtruck), session)
    return len(result.scalars().all())


class TestSyncSession:

    @pytest.mark.asyncio
    async def test_rollback_discards_flushed_rows(self, session):
        session.add(Foodtruck(id="ft-brouillon", name="Brouillon", is_active=True))
        await session_flush(session)
        assert await count_foodtrucks(session) == 1

        await session_rollback(session)

        assert await count_foodtrucks(session) == 0

    @pytest.mark.asyncio
    async def test_rollback_keeps_committed_rows(self, session):
        session.add(Foodtruck(id="ft-garde", name="Gardé", is_active=True))
        await session_commit(session)
        session.add(Foodtruck(id="ft-brouillon", name="Brouillon", is_active=True))
        await session_flush(session)

        await session_rollback(session)

        assert await count_foodtrucks(session) == 1


class TestAsyncSession:

    @pytest.mark.asyncio
    async def test_rollback_discards_flushed_rows(self, async_session):
        async_session.add(Foodtruck(id="ft-brouillon", name="Brouillon", is_active=True))
        await session_flush(async_session)
        assert await count_foodtrucks(async_session) == 1

        await session_rollback(async_session)

        assert await count_foodtrucks(async_session) == 0

    @pytest.mark.asyncio
    async def test_commit_persists(self, async_session):
        async_session.add(Foodtruck(id="ft-garde", name="Gardé", is_active=True))
        await session_commit(async_session)

        assert await count_foodtrucks(async_session) == 1
