"""Service test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe hits the test engine
    - make_inquiry writes through its own session (no stale identity map in tests)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - make_inquiry mirrors a model factory: sensible defaults, keyword overrides
"""

import itertools

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from inquiry_api.db.base import Base
from inquiry_api.infrastructure.database import get_db, DatabaseSessionManager
from inquiry_api.models.inquiry import Inquiry
import inquiry_api.infrastructure.database as db_module
from inquiry_api.main import app


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
async def client(test_engine, test_session_factory):
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
def make_inquiry(test_session_factory):
    """Insert an inquiry with factory defaults; keyword args override columns."""
    counter = itertools.count(1)

    async def _make(**overrides) -> Inquiry:
        n = next(counter)
        fields = {
            "name": f"Customer {n}",
            "email": f"customer{n}@example.com",
            "phone": None,
            "category": "Trading",
            "subject": f"Question number {n}",
            "message": "This message is long enough to pass validation.",
            "status": "pending",
            "priority": "medium",
        }
        fields.update(overrides)
        async with test_session_factory() as session:
            inquiry = Inquiry(**fields)
            session.add(inquiry)
            await session.commit()
            await session.refresh(inquiry)
            return inquiry

    return _make


@pytest.fixture
def load_inquiry(test_session_factory):
    """Read a row straight from storage, soft-deleted rows included."""
    async def _load(inquiry_id: int) -> Inquiry | None:
        async with test_session_factory() as session:
            return await session.get(Inquiry, inquiry_id)

    return _load
