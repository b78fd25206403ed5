"""Root conftest — shared test configuration, DB fixtures and decision factory.

Invariants:
    - Every DB test gets a fresh in-memory SQLite database
    - make_decision builds real Decision objects (no mocks for domain data)
"""

import os

# Ensure tests never touch a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from release_dispatch.core.decisions import Decision, Release, RemoteContent
from release_dispatch.core.domain_types import ContentUnitId, DownloadProtocol
from release_dispatch.db.base import Base
from release_dispatch.infrastructure.database import DatabaseSessionManager
import release_dispatch.models  # noqa: F401


@pytest.fixture
def make_decision():
    """Factory: make_decision("A", [1, 2], protocol="usenet", temporarily_rejected=True)."""
    def _make(
        guid: str,
        units=(1,),
        protocol: DownloadProtocol | str = DownloadProtocol.TORRENT,
        approved: bool = True,
        temporarily_rejected: bool = False,
        rejected: bool = False,
    ) -> Decision:
        release = Release(guid=guid, title=f"Release {guid}", protocol=protocol)
        return Decision(
            RemoteContent(release, tuple(ContentUnitId(u) for u in units)),
            approved=approved,
            temporarily_rejected=temporarily_rejected,
            rejected=rejected,
        )
    return _make


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
def test_db_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the in-memory test engine."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager
