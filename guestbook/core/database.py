"""
Database Configuration.

SQLAlchemy async engine and session management.

The storage backend is chosen explicitly by the URL handed to
``build_engine`` / ``init_database``: the application passes the DSN-derived
URL at startup, tests pass an in-memory SQLite URL. Both go through the same
calls. When nothing has been initialized, the engine is created lazily from
configuration on first use.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from guestbook.core.logging import get_logger

logger = get_logger(__name__)

# Module-level state for lazy initialization
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def is_sqlite_url(url: str) -> bool:
    """Check whether a SQLAlchemy URL targets SQLite."""
    return make_url(url).get_backend_name() == "sqlite"


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async SQLAlchemy engine for the given URL.

    SQLite gets a single shared connection so in-memory databases survive
    across sessions; server databases get the pool settings from
    database.yaml.

    Args:
        url: SQLAlchemy URL with an async driver
        echo: Log emitted SQL

    Returns:
        SQLAlchemy async engine
    """
    if is_sqlite_url(url):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    from guestbook.core.config import get_app_config

    db_config = get_app_config().database
    return create_async_engine(
        url,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_recycle=db_config.pool_recycle,
        echo=echo or db_config.echo,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all mapped tables that do not exist yet.

    Existing tables are left untouched, so this is safe on every startup.
    """
    from guestbook.models.base import Base

    # Registers the comments table on Base.metadata
    import guestbook.models.comment  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


async def init_database(url: str, create_schema: bool = True) -> AsyncEngine:
    """
    Initialize the process-wide engine and session factory.

    Args:
        url: SQLAlchemy URL selecting the storage backend
        create_schema: Ensure tables exist after connecting

    Returns:
        The initialized engine
    """
    global _engine, _async_session_factory

    if _engine is not None:
        await _engine.dispose()

    _engine = build_engine(url)
    _async_session_factory = None
    logger.info(
        "Database engine created",
        extra={"backend": make_url(url).get_backend_name()},
    )

    if create_schema:
        await create_tables(_engine)
    return _engine


async def dispose_database() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.debug("Database engine disposed")
    _engine = None
    _async_session_factory = None


def get_engine() -> AsyncEngine:
    """
    Get the database engine, creating it from configuration on first use.

    Returns:
        SQLAlchemy async engine instance

    Raises:
        pydantic.ValidationError: If DSN is not configured
    """
    global _engine
    if _engine is None:
        from guestbook.core.config import get_database_url

        _engine = build_engine(get_database_url())
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get the session factory, creating it on first use.

    Returns:
        SQLAlchemy async session factory
    """
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_factory


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Commits when the request finishes normally, rolls back otherwise.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def engine_status() -> dict[str, Any]:
    """Describe the current engine for health reporting."""
    if _engine is None:
        return {"initialized": False}
    return {
        "initialized": True,
        "backend": _engine.url.get_backend_name(),
    }
