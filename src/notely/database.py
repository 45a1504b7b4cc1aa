# Database connection setup
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .core.logging import get_logger
from .core.models.base import BaseModel

logger = get_logger("database")


class Database:
    """Store handle: one engine plus its session factory.

    Built once at startup and handed to whoever needs sessions. Nothing is
    opened until connect() and disconnect() disposes the pool.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, echo=self.echo, **self.engine_kwargs)
        self._sessionmaker = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info("Database engine created", extra={"dialect": self._engine.dialect.name})

    async def disconnect(self) -> None:
        """Dispose the engine and its pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Scoped session, always closed on exit."""
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        async with self._sessionmaker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def create_tables(self) -> None:
        """Create all tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop all tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.drop_all)

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()


def get_database(request: Request) -> Database:
    """The Database attached to the app at startup."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database has not been initialised for this app")
    return db


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Get database session."""
    async with get_database(request).session() as session:
        yield session
