"""Async SQLAlchemy store handle.

The Database object owns the engine and the session factory for the whole
process. It is constructed explicitly, opened once at startup and closed on
shutdown:
- connect() verifies connectivity (and creates tables in dev/test)
- session() yields an AsyncSession with rollback on error
- close() disposes of the connection pool
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.config import Settings
from core.errors import TransportError
from core.models.base import Base


def _engine_options(settings: Settings) -> dict:
    options: dict = {"echo": settings.echo_sql}
    if settings.database_url.startswith("sqlite"):
        # A single shared connection keeps ":memory:" databases alive
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.pool_size
        options["max_overflow"] = settings.max_overflow
        options["pool_pre_ping"] = True
    return options


class Database:
    """Process-wide store handle injected into the app at startup."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise TransportError("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        """Create the engine and check that the store answers.

        Raises TransportError when the store is unreachable; callers treat
        that as fatal at startup.
        """
        if self._engine is not None:
            return

        engine = create_async_engine(self.settings.database_url, **_engine_options(self.settings))
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if self.settings.create_tables:
                    await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as exc:
            await engine.dispose()
            raise TransportError(f"Could not connect to database: {exc}") from exc

        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Connected to database {}", engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        """Dispose of the connection pool on shutdown."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; roll back whatever is pending if the block fails."""
        if self._session_factory is None:
            raise TransportError("Database is not connected")
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the Database the app was started with.

    Usage in FastAPI routes::

        @router.get("/items")
        async def list_items(session: AsyncSession = Depends(get_session)):
            result = await session.execute(select(Item))
            return result.scalars().all()
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
