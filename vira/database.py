"""
Database engine, session factory and storage lifecycle
"""

from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
import structlog

from vira.config import settings

logger = structlog.get_logger()

Base = declarative_base()


def _normalize_url(url: str) -> str:
    # Hosted Postgres often hands out postgres:// URLs
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


engine = create_async_engine(
    _normalize_url(settings.database_url),
    echo=settings.database_echo,
    pool_pre_ping=True,
)

SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Storage:
    """Owns the engine and the one-time schema setup.

    The composition root calls :meth:`initialize` once at startup; nothing
    else creates tables on first use.
    """

    def __init__(self, bind: AsyncEngine):
        self.engine = bind
        self.initialized = False

    async def initialize(self) -> None:
        """Create missing tables"""
        # Register every model on Base.metadata
        import vira.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.initialized = True
        logger.info("Storage initialized", url=self.engine.url.render_as_string(hide_password=True))

    async def ping(self) -> None:
        """Run a trivial query to verify connectivity"""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


storage = Storage(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for a request"""
    async with SessionLocal() as session:
        yield session
