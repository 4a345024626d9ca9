"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, service mocks, work session factories
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock

import pytest


@pytest.fixture
async def test_engine():
    """
    Create an in-memory SQLite async engine with the schema installed.

    Yields:
        AsyncEngine: Engine shared by every session of the test (StaticPool)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from worksync.boundary.db.base import Base
    import worksync.boundary.db.models  # noqa: F401  (registers tables)

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create in-memory SQLite async database session for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_session_service():
    """
    Create mock SessionLifecycleService for router tests.

    Returns:
        AsyncMock: Service with async methods
    """
    return AsyncMock()


@pytest.fixture
def mock_sync_service():
    """
    Create mock SyncReconciliationService for router tests.

    Returns:
        AsyncMock: Service whose reconcile reports an applied write
    """
    service = AsyncMock()
    service.reconcile = AsyncMock(return_value=True)
    return service
