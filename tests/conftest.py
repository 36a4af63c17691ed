import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from newsletter.core.config import Settings
from newsletter.models import Base
from newsletter.startup import create_app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings():
    """Settings isolated from the developer's .env file."""
    return Settings(DATABASE_URL=TEST_DATABASE_URL, _env_file=None)


@pytest.fixture
def test_logger():
    return logging.getLogger("newsletter.tests")


@pytest_asyncio.fixture
async def async_engine():
    """Create an async engine for testing."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(async_engine):
    """Create an async session for testing."""
    async_session_maker = async_sessionmaker(
        async_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def app(settings, async_engine, test_logger):
    return create_app(settings, engine=async_engine, logger=test_logger)


@pytest_asyncio.fixture
async def client(app):
    """Create test client bound to the in-memory database."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def unavailable_client(settings, test_logger):
    """Client whose database cannot be reached."""
    engine = create_async_engine("sqlite+aiosqlite:////nonexistent/dir/newsletter.db")
    app = create_app(settings, engine=engine, logger=test_logger)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    await engine.dispose()


@pytest.fixture
def form_headers():
    return {"Content-Type": "application/x-www-form-urlencoded"}
