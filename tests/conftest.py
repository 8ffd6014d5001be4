"""Pytest fixtures for unit and integration tests."""
import os

# Settings are cached on first use; point them at the test environment first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CURATOR_ADDRESSES"] = "0x" + "c" * 40
os.environ["ATTESTER_ADDRESSES"] = "0x" + "a" * 40
os.environ["HMAC_SECRET"] = ""

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from streak_quest.auth.capabilities import resolve_caller  # noqa: E402
from streak_quest.database import get_db  # noqa: E402
from streak_quest.main import app  # noqa: E402
from streak_quest.models import Base, WorldState, WORLD_STATE_ID  # noqa: E402
from game_helpers import ATTESTER, CURATOR, DAY, ENTRY_FEE, LAUNCH, WEEK  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    # Fresh in-memory database per test; StaticPool keeps it on one connection.
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    TestSession = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestSession() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def world(db) -> WorldState:
    """World at week 0 with the default 0.00001 ETH entry fee."""
    w = WorldState(
        id=WORLD_STATE_ID,
        launch_timestamp=LAUNCH,
        week_length_seconds=WEEK,
        day_length_seconds=DAY,
        daily_task_cap=3,
        entry_fee=ENTRY_FEE,
        current_week=0,
        weekly_prize_pool=0,
    )
    db.add(w)
    await db.commit()
    return w


@pytest.fixture
def alice():
    return resolve_caller("0x" + "1" * 40)


@pytest.fixture
def bob():
    return resolve_caller("0x" + "2" * 40)


@pytest.fixture
def carol():
    return resolve_caller("0x" + "3" * 40)


@pytest.fixture
def curator():
    return resolve_caller(CURATOR)


@pytest.fixture
def attester():
    return resolve_caller(ATTESTER)


@pytest_asyncio.fixture
async def client(db) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client with DB override."""
    app.dependency_overrides[get_db] = lambda: db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
