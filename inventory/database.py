"""
Product Inventory API: Database Engine Helpers
==============================================

What:  Async SQLAlchemy engine and session-factory construction for the SQL store.
Why:   Centralizes connection settings in one place; the SQL store and
       Alembic both build engines through here.
How:   `create_engine()` builds an async engine from a URL; the store owns
       the engine it is given and disposes it on close().

Connection Pooling:
    pool_pre_ping validates connections before use, catching stale ones
    after a database restart. SQLite URLs skip the pool sizing arguments
    the SQLite dialect does not take.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models, the SQL store's
    `create_schema()` and Alembic.
    """
    pass


def create_engine(
    database_url: str,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """
    Build an async engine for the given URL.

    Args:
        database_url: Async SQLAlchemy URL (e.g. sqlite+aiosqlite:///./inventory.db)
        pool_pre_ping: Validate pooled connections before use
        echo: Log every SQL statement (DEBUG only)
    """
    kwargs = {"pool_pre_ping": pool_pre_ping, "echo": echo}
    if not database_url.startswith("sqlite"):
        kwargs.update(pool_size=5, max_overflow=5, pool_recycle=3600)
    return create_async_engine(database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory with expire_on_commit=False.

    Items are read off ORM rows after commit; expiring them would trigger
    a lazy reload outside the session.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
