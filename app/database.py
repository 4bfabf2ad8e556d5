"""
Database setup for async SQLAlchemy.
Provides the declarative Base and the process-scoped engine wrapper.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""
    pass


class Database:
    """
    Owns the async engine and session factory.

    Created once in the application lifespan and disposed at shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        """Create all tables registered on Base.metadata."""
        # Register models with the metadata before create_all
        from app.auth import models as _auth_models  # noqa: F401
        from app.analyses import models as _analyses_models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session bound to one unit of work.

        Write services commit before responding; whatever is still pending
        is committed when the caller finishes cleanly, rolled back otherwise.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("[Database] Engine disposed")
