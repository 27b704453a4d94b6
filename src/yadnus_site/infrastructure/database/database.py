"""Database configuration and session management."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

# Base class for all models
Base = declarative_base()


class Database:
    """Database connection manager."""

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize database with connection URL."""
        # Convert to async URL if needed
        if database_url.startswith("postgresql://"):
            database_url = database_url.replace(
                "postgresql://", "postgresql+asyncpg://"
            )

        if database_url.startswith("sqlite"):
            # One shared connection so in-memory databases survive across sessions
            engine_options = {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        else:
            engine_options = {
                "pool_pre_ping": True,
                "pool_size": 10,
                "max_overflow": 20,
            }

        self.engine = create_async_engine(database_url, echo=echo, **engine_options)

        self.async_session = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get database session."""
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_tables(self) -> None:
        """Create all tables."""
        # Register the models on Base.metadata
        from . import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop all tables (use with caution)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def close(self) -> None:
        """Close database connections."""
        await self.engine.dispose()
