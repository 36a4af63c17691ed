from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from newsletter.core.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the connection pool shared by every request."""
    return create_async_engine(
        settings.connection_string,
        echo=False,  # Query logging goes through logfire instrumentation instead
        pool_pre_ping=True,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


async def get_db(request: Request):
    session_factory = request.app.state.sessionmaker
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
