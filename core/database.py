"""Async SQLAlchemy database handle and session management.

The ``Database`` object owns the engine and session factory for one
application instance. ``create_app`` stores it on ``app.state.database``
and request handlers reach it through the ``get_session`` dependency, so
there is no process-wide engine:

- Connection pooling (configurable pool_size/max_overflow)
- Optional schema/catalog mapping via ``schema_translate_map``
- SQLite URLs (tests, local runs) share one connection through StaticPool
"""

from typing import AsyncGenerator

from fastapi import Request
from loguru import logger
from sqlalchemy.pool import StaticPool
from sqlalchemy.schema import CreateSchema
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings
from core.models.base import Base


# ---------------------------------------------------------------------------
# Database handle
# ---------------------------------------------------------------------------

class Database:
    """Engine + session factory for a single store."""

    def __init__(
        self,
        url: str,
        *,
        schema: str | None = None,
        pool_size: int = 20,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        self.url = url
        self.schema = schema

        if url.startswith("sqlite"):
            engine = create_async_engine(url, echo=echo, poolclass=StaticPool)
        else:
            engine = create_async_engine(
                url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                echo=echo,
                pool_pre_ping=True,
            )
        self._root_engine: AsyncEngine = engine

        if schema:
            engine = engine.execution_options(schema_translate_map={None: schema})
        self.engine: AsyncEngine = engine

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            schema=settings.db_schema,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            echo=settings.db_echo,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    async def create_tables(self) -> None:
        """Create tables for every model registered on ``Base`` (dev/test only)."""
        async with self.engine.begin() as conn:
            if self.schema and not self.is_sqlite:
                await conn.execute(CreateSchema(self.schema, if_not_exists=True))
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables ensured (schema={})", self.schema or "default")

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Dispose of the connection pool on shutdown."""
        await self._root_engine.dispose()


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session bound to the app's ``Database``.

    Writes are committed by the service layer; anything left open when a
    handler raises is rolled back here.

    Usage in FastAPI routes::

        @router.get("/items")
        async def list_items(session: AsyncSession = Depends(get_session)):
            result = await session.execute(select(Item))
            return result.scalars().all()
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
