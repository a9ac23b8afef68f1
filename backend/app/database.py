"""
Blog Backend - Database Engine & Session Management
=====================================================

What:  Async SQLAlchemy engine builder, session factory builder, and the
       declarative Base shared by all models.
How:   build_engine() picks pool settings by backend: a sized QueuePool for
       server databases, StaticPool for in-memory SQLite. SQLite connections
       get PRAGMA foreign_keys=ON so foreign keys are enforced the same way
       PostgreSQL enforces them.
Who:   Used by BlogStore (one engine per store) and by Alembic (Base.metadata).
When:  Engines are built once per application; the pool connects lazily on
       first use.

Connection Pooling Strategy (server databases):
    pool_size:        Persistent connections for normal load
    max_overflow:     Temporary connections for traffic spikes
    pool_pre_ping:    Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour
"""

from typing import Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with a single metadata
    object, which Alembic and BlogStore.create_schema() both read.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with foreign key enforcement off, per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create an async engine for the given URL (defaults to settings.database_url).

    SQLite:
        - file databases use SQLAlchemy's default pool
        - in-memory databases (sqlite+aiosqlite:// or :memory:) use StaticPool,
          so every session sees the same database
        - foreign keys are switched on for every new DBAPI connection

    Everything else gets the pool sizing from settings.
    """
    url = make_url(database_url or settings.database_url)
    echo = settings.log_level == "DEBUG"

    if url.get_backend_name() == "sqlite":
        kwargs = {}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(url, echo=echo, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps loaded attributes readable after commit, so
    rows returned from a finished transaction can still be serialized.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
